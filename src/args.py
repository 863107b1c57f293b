"""Argument parsing functionality for pinbump."""

import argparse

from registry import registries_by_name


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="pinbump",
        description=(
            "pinbump - Update versioned import URLs in a source file to the "
            "newest compatible release"
        ),
        add_help=True,
    )

    parser.add_argument("FILE",
                        help="Source file whose import URLs should be updated",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Resolve new versions without editing the file.",
                        action="store_true",
                        default=None)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not print progress messages.",
                        action="store_true",
                        default=None)
    parser.add_argument("--test",
                        dest="TEST",
                        help="Shell command run after each update; a non-zero exit reverts it",
                        action="store",
                        type=str)
    parser.add_argument("--registry",
                        dest="REGISTRIES",
                        help="Only match URLs from this registry (repeatable, priority order)",
                        action="append",
                        type=str,
                        choices=sorted(registries_by_name()))
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to write the outcomes as JSON",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if any update failed.",
                        action="store_true")

    return parser.parse_args(argv)
