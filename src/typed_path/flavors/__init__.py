"""Built-in rule sets and their path classes."""

from typed_path.flavors._posix import POSIX, PosixPath, PosixPathBuf, Utf8PosixPath, Utf8PosixPathBuf
from typed_path.flavors._windows import (
    WINDOWS,
    Utf8WindowsPath,
    Utf8WindowsPathBuf,
    WindowsPath,
    WindowsPathBuf,
)

__all__ = [
    "POSIX",
    "PosixPath",
    "PosixPathBuf",
    "Utf8PosixPath",
    "Utf8PosixPathBuf",
    "WINDOWS",
    "WindowsPath",
    "WindowsPathBuf",
    "Utf8WindowsPath",
    "Utf8WindowsPathBuf",
]
