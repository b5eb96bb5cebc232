"""Scanner module for import extraction, pool discovery and resolution."""

from .errors import (
    ScanError,
    FileAccessError,
    NotABinaryError,
    TooManyLevelsError,
    MalformedImportTableError,
    ConfigError,
)
from .formats import extract_imports, collect_imports
from .discovery import iter_files, build_pool
from .resolver import find_candidate, resolve

__all__ = [
    "ScanError",
    "FileAccessError",
    "NotABinaryError",
    "TooManyLevelsError",
    "MalformedImportTableError",
    "ConfigError",
    "extract_imports",
    "collect_imports",
    "iter_files",
    "build_pool",
    "find_candidate",
    "resolve",
]
