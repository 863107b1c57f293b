"""Error taxonomy for version resolution and updates."""


class NotSemverError(ValueError):
    """Raised when a version string does not follow MAJOR.MINOR.PATCH[-PRE][+BUILD]."""


class ConstraintSyntaxError(ValueError):
    """Raised when a modifier or URL fragment is not a valid constraint."""


class RegistryFetchError(RuntimeError):
    """Raised when a registry cannot be queried; aborts the whole run."""
