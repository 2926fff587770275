"""Host rule set alias and the current directory provider."""

from __future__ import annotations

import logging
import os

from typed_path._errors import CurrentDirUnavailable
from typed_path.flavors._posix import POSIX, PosixPath, PosixPathBuf, Utf8PosixPath, Utf8PosixPathBuf
from typed_path.flavors._windows import WINDOWS, Utf8WindowsPath, Utf8WindowsPathBuf, WindowsPath, WindowsPathBuf

log = logging.getLogger(__name__)

if os.name == "nt":  # pragma: no cover
    NATIVE = WINDOWS
    NativePath: type[PosixPath | WindowsPath] = WindowsPath
    NativePathBuf: type[PosixPathBuf | WindowsPathBuf] = WindowsPathBuf
    Utf8NativePath: type[Utf8PosixPath | Utf8WindowsPath] = Utf8WindowsPath
    Utf8NativePathBuf: type[Utf8PosixPathBuf | Utf8WindowsPathBuf] = Utf8WindowsPathBuf
else:
    NATIVE = POSIX
    NativePath = PosixPath
    NativePathBuf = PosixPathBuf
    Utf8NativePath = Utf8PosixPath
    Utf8NativePathBuf = Utf8PosixPathBuf


def current_dir() -> PosixPathBuf | WindowsPathBuf:
    """Return the process working directory as raw bytes under the native rules.

    :raises CurrentDirUnavailable: If the working directory cannot be read.
    """
    try:
        raw = os.getcwdb()
    except OSError as exc:
        raise CurrentDirUnavailable(f"Cannot read current directory: {exc}", encoding=NATIVE.label) from exc
    log.debug("current directory: %r", raw)
    return NativePathBuf(raw)


def current_dir_text() -> Utf8PosixPathBuf | Utf8WindowsPathBuf:
    """Text variant of :func:`current_dir`.

    :raises CurrentDirUnavailable: If the working directory cannot be read.
    """
    try:
        raw = os.getcwd()
    except OSError as exc:
        raise CurrentDirUnavailable(f"Cannot read current directory: {exc}", encoding=NATIVE.label) from exc
    log.debug("current directory: %r", raw)
    return Utf8NativePathBuf(raw)
