"""Configuration file loading and CLI/config merging.

Precedence, highest first: CLI flags, configuration file, built-in defaults.
The configuration file is taken from ``--config``, else ``PINBUMP_CONFIG``,
else the first default file present in the working directory.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from typing import Any, Callable, Dict, Optional

import yaml

from constants import Constants
from registry import registries_by_name
from updater import UpdateOptions

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"dry_run", "quiet", "test", "registries", "request_timeout"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


def _resolve_config_path(path: Optional[str] = None) -> Optional[str]:
    if path:
        return path
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        return env_path
    for candidate in Constants.DEFAULT_CONFIG_FILES:
        if os.path.isfile(candidate):
            return candidate
    return None


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the configuration mapping; an absent default file yields ``{}``.

    Raises:
        ConfigError: when an explicit file is missing or any file is invalid.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return {}
    if not os.path.isfile(config_path):
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            if config_path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid configuration file {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
    logger.debug("Loaded configuration from %s", config_path)
    return data


def command_test(command: str) -> Callable[[], None]:
    """Validation hook running ``command`` in a shell; non-zero exit raises."""
    def _run() -> None:
        logger.info("Running test command: %s", command)
        subprocess.run(command, shell=True, check=True)
    return _run


def _pick(cli_value: Any, config: Dict[str, Any], key: str, default: Any) -> Any:
    if cli_value is not None:
        return cli_value
    return config.get(key, default)


def build_options(args: Any, config: Dict[str, Any]) -> UpdateOptions:
    """Merge parsed CLI arguments over ``config`` into ``UpdateOptions``.

    Raises:
        ConfigError: on unknown registry names or malformed values.
    """
    dry_run = _pick(getattr(args, "DRY_RUN", None), config, "dry_run", False)
    quiet = _pick(getattr(args, "QUIET", None), config, "quiet", False)
    test_cmd = _pick(getattr(args, "TEST", None), config, "test", None)
    names = _pick(getattr(args, "REGISTRIES", None), config, "registries", None)

    if not isinstance(dry_run, bool) or not isinstance(quiet, bool):
        raise ConfigError("'dry_run' and 'quiet' must be booleans")
    if test_cmd is not None and not isinstance(test_cmd, str):
        raise ConfigError("'test' must be a shell command string")

    registries = None
    if names is not None:
        if not isinstance(names, list):
            raise ConfigError("'registries' must be a list of registry names")
        known = registries_by_name()
        unknown = [name for name in names if name not in known]
        if unknown:
            raise ConfigError(
                f"Unknown registry name(s): {', '.join(map(str, unknown))}. "
                f"Known registries: {', '.join(sorted(known))}"
            )
        registries = [known[name] for name in names]

    timeout = config.get("request_timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError("'request_timeout' must be a positive number of seconds")

    return UpdateOptions(
        dry_run=dry_run,
        quiet=quiet,
        test=command_test(test_cmd) if test_cmd else None,
        registries=registries,
        request_timeout=timeout,
    )
