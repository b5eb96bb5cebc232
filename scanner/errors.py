"""Exceptions raised while scanning binaries and candidate directories."""


class ScanError(Exception):
    """Base class for all fatal scanning errors."""


class FileAccessError(ScanError):
    """A path is missing, unreadable, or not the kind of file expected."""


class NotABinaryError(ScanError):
    """A file matches none of the supported binary formats."""
    
    def __init__(self, path):
        super().__init__(f"Unknown module type: '{path}'")
        self.path = path


class TooManyLevelsError(ScanError):
    """Directory traversal went deeper than the recursion ceiling."""
    
    def __init__(self, path=None):
        super().__init__("Too many directory recursion levels")
        self.path = path


class MalformedImportTableError(ScanError):
    """A PE import descriptor points at a name outside its section."""


class ConfigError(ScanError):
    """The configuration file is unreadable or invalid."""
