"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    EXIT_WARNINGS = 3


class Modifiers(Enum):
    """Version modifiers understood in a version token or URL fragment.

    Args:
        Enum (string): Single-character constraint operators.
    """

    CARET = "^"
    TILDE = "~"
    EXACT = "="
    LESS_THAN = "<"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    DENO_CDN = "https://cdn.deno.land"
    GITHUB_API_BASE = "https://api.github.com"
    REPO_API_PER_PAGE = 100
    MODIFIERS = [m.value for m in Modifiers]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_LOG_LEVEL = "PINBUMP_LOG_LEVEL"
    ENV_CONFIG = "PINBUMP_CONFIG"
    DEFAULT_CONFIG_FILES = [".pinbump.yml", ".pinbump.yaml", "pinbump.json"]
    NO_COMPATIBLE_VERSION = "no compatible version found"
