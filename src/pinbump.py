"""pinbump - keep versioned import URLs current.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from args import parse_args
from cli_config import ConfigError, build_options, load_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from progress import describe
from updater import run_sync
from versioning.errors import RegistryFetchError

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    # Honor CLI --loglevel over the environment default
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def export_json(outcomes, path):
    """Exports the outcomes to a JSON file.

    Args:
        outcomes (list): List of UpdateOutcome records.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump([o.to_dict() for o in outcomes], file, ensure_ascii=False, indent=2)
        logger.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logger.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    if not os.path.isfile(args.FILE):
        logger.error("File not found: %s, aborting", args.FILE)
        return ExitCodes.FILE_ERROR.value

    try:
        options = build_options(args, load_config(args.CONFIG))
    except ConfigError as e:
        logger.error("%s, aborting", e)
        return ExitCodes.FILE_ERROR.value

    try:
        outcomes = run_sync(args.FILE, options)
    except RegistryFetchError as e:
        logger.error("Registry lookup failed: %s, aborting", e)
        return ExitCodes.CONNECTION_ERROR.value
    except (OSError, UnicodeDecodeError) as e:
        logger.error("IO error: %s, aborting", e)
        return ExitCodes.FILE_ERROR.value

    changed = [o for o in outcomes if o.success is not None]
    for outcome in changed:
        if outcome.success:
            logger.info("%s", describe(outcome))
        else:
            logger.warning("%s", describe(outcome))
    if not changed:
        logger.info("Already up-to-date: %s", args.FILE)

    if args.OUTPUT:
        export_json(outcomes, args.OUTPUT)

    if args.ERROR_ON_WARNINGS and any(o.success is False for o in outcomes):
        return ExitCodes.EXIT_WARNINGS.value
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
