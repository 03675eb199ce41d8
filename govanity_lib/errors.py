class GovanityError(Exception):
    """Base class for fatal govanity errors."""


class ConfigError(GovanityError):
    """Malformed configuration file or an entry that cannot be resolved."""


class FilesystemError(GovanityError):
    """Directory walk failure or an unexpected read/write failure."""
