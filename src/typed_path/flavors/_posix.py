"""POSIX rule set and path classes."""

from __future__ import annotations

from typed_path._encoding import Encoding
from typed_path._path import Path, PathBuf, register_flavor

POSIX = Encoding(
    label="posix",
    separator="/",
    separators=("/",),
    disallowed=frozenset({"/", "\0"}),
)


class PosixPath(Path):
    """Immutable POSIX-style path over raw bytes."""

    __slots__ = ()
    encoding = POSIX
    _text = False


class PosixPathBuf(PathBuf):
    """Owned POSIX-style path buffer over raw bytes."""

    __slots__ = ()
    encoding = POSIX
    _text = False


class Utf8PosixPath(Path):
    """Immutable POSIX-style path over text."""

    __slots__ = ()
    encoding = POSIX
    _text = True


class Utf8PosixPathBuf(PathBuf):
    """Owned POSIX-style path buffer over text."""

    __slots__ = ()
    encoding = POSIX
    _text = True


register_flavor(PosixPath, PosixPathBuf)
register_flavor(Utf8PosixPath, Utf8PosixPathBuf)
