"""Tests for argument parsing, configuration merging and the CLI entry point."""

import json
import subprocess
from unittest.mock import patch

import pytest

import pinbump
from args import parse_args
from cli_config import ConfigError, build_options, command_test, load_config
from constants import Constants, ExitCodes
from registry import DenoLand, Unpkg
from versioning.errors import RegistryFetchError
from versioning.models import UpdateOutcome


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run from an empty directory with no config file or env override."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "INFO")


class TestArgParsing:
    """Command line flags."""

    def test_defaults(self):
        ns = parse_args(["deps.ts"])
        assert ns.FILE == "deps.ts"
        assert ns.DRY_RUN is None
        assert ns.QUIET is None
        assert ns.TEST is None
        assert ns.REGISTRIES is None
        assert ns.LOG_LEVEL == "INFO"
        assert ns.ERROR_ON_WARNINGS is False

    def test_flags(self):
        ns = parse_args([
            "deps.ts", "--dry-run", "-q", "--test", "deno test",
            "--registry", "unpkg", "--registry", "deno.land",
            "-o", "out.json", "--loglevel", "DEBUG",
        ])
        assert ns.DRY_RUN is True
        assert ns.QUIET is True
        assert ns.TEST == "deno test"
        assert ns.REGISTRIES == ["unpkg", "deno.land"]
        assert ns.OUTPUT == "out.json"
        assert ns.LOG_LEVEL == "DEBUG"

    def test_unknown_registry_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["deps.ts", "--registry", "nope"])


class TestConfig:
    """Config file loading and precedence."""

    def test_no_config_file(self):
        assert load_config() == {}

    def test_default_yaml_file(self, tmp_path):
        (tmp_path / ".pinbump.yml").write_text("dry_run: true\nregistries: [unpkg]\n", encoding="utf-8")
        assert load_config() == {"dry_run": True, "registries": ["unpkg"]}

    def test_env_config_path(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"quiet": True}), encoding="utf-8")
        monkeypatch.setenv(Constants.ENV_CONFIG, str(path))
        assert load_config() == {"quiet": True}

    def test_explicit_missing_file(self):
        with pytest.raises(ConfigError, match="not found"):
            load_config("missing.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("dry_run: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(str(path))

    def test_cli_overrides_config(self):
        args = parse_args(["deps.ts", "--registry", "deno.land"])
        opts = build_options(args, {"dry_run": True, "quiet": True, "registries": ["unpkg"]})
        assert opts.dry_run is True
        assert opts.quiet is True
        assert opts.registries == [DenoLand]
        assert opts.test is None

    def test_config_registries_and_timeout(self):
        opts = build_options(parse_args(["deps.ts"]), {"registries": ["unpkg"], "request_timeout": 5})
        assert opts.registries == [Unpkg]
        assert opts.request_timeout == 5

    def test_timeout_does_not_change_process_default(self):
        default = Constants.REQUEST_TIMEOUT
        build_options(parse_args(["deps.ts"]), {"request_timeout": 1})
        assert Constants.REQUEST_TIMEOUT == default

    def test_defaults_use_builtin_registries(self):
        opts = build_options(parse_args(["deps.ts"]), {})
        assert opts.registries is None
        assert opts.dry_run is False
        assert opts.request_timeout is None

    @pytest.mark.parametrize("config", [
        {"registries": ["nope"]},
        {"registries": "unpkg"},
        {"dry_run": "yes"},
        {"test": 3},
        {"request_timeout": -1},
    ])
    def test_invalid_values(self, config):
        with pytest.raises(ConfigError):
            build_options(parse_args(["deps.ts"]), config)

    def test_command_test(self):
        command_test("exit 0")()
        with pytest.raises(subprocess.CalledProcessError):
            command_test("exit 1")()


class TestMain:
    """Exit codes and output of the CLI."""

    def test_missing_file(self):
        assert pinbump.main(["missing.ts"]) == ExitCodes.FILE_ERROR.value

    def test_invalid_config(self, tmp_path):
        (tmp_path / "deps.ts").write_text("", encoding="utf-8")
        assert pinbump.main(["deps.ts", "-c", "missing.yml"]) == ExitCodes.FILE_ERROR.value

    @patch("pinbump.run_sync")
    def test_fetch_error(self, mock_run, tmp_path):
        (tmp_path / "deps.ts").write_text("", encoding="utf-8")
        mock_run.side_effect = RegistryFetchError("npm connection error")
        assert pinbump.main(["deps.ts"]) == ExitCodes.CONNECTION_ERROR.value

    @patch("pinbump.run_sync")
    def test_output_and_warnings(self, mock_run, tmp_path):
        (tmp_path / "deps.ts").write_text("", encoding="utf-8")
        mock_run.return_value = [
            UpdateOutcome("https://a@1.0.0", "1.0.0", "1.1.0", True),
            UpdateOutcome("https://b@1.0.0", "1.0.0", "no compatible version found", False),
            UpdateOutcome("https://c@main", "main"),
        ]

        code = pinbump.main(["deps.ts", "-o", "out.json", "--error-on-warnings"])

        assert code == ExitCodes.EXIT_WARNINGS.value
        exported = json.loads((tmp_path / "out.json").read_text(encoding="utf-8"))
        assert exported[0] == {"initUrl": "https://a@1.0.0", "initVersion": "1.0.0",
                               "message": "1.1.0", "success": True}
        assert exported[2] == {"initUrl": "https://c@main", "initVersion": "main"}

    @patch("pinbump.run_sync")
    def test_success(self, mock_run, tmp_path):
        (tmp_path / "deps.ts").write_text("", encoding="utf-8")
        mock_run.return_value = [UpdateOutcome("https://a@1.0.0", "1.0.0", "1.0.1", False)]
        assert pinbump.main(["deps.ts"]) == ExitCodes.SUCCESS.value
        options = mock_run.call_args.args[1]
        assert options.dry_run is False
