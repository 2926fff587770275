"""Encoding registry: choose a rule set by name at runtime."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Union

from typed_path._encoding import Encoding
from typed_path._errors import UnknownEncoding
from typed_path._path import flavor

if TYPE_CHECKING:
    from typed_path._path import Path, PathBuf
    from typed_path._types import RawPath

log = logging.getLogger(__name__)

EncodingLike = Union[str, Encoding]  # noqa: UP007

# Maps lower-cased labels to rule sets.
_ENCODINGS: dict[str, Encoding] = {}


def register_encoding(label: str, encoding: Encoding) -> None:
    """Make ``encoding`` available under ``label``.

    :param label: Case-insensitive name (e.g. ``"posix"``).
    :param encoding: The rule set.
    """
    _ENCODINGS[label.lower()] = encoding
    log.debug("registered encoding %r as %r", encoding.label, label)


def _register_builtin_encodings() -> None:
    """Register the built-in rule sets."""
    from typed_path._native import NATIVE
    from typed_path.flavors import POSIX, WINDOWS

    for label, encoding in (("posix", POSIX), ("unix", POSIX), ("windows", WINDOWS), ("native", NATIVE)):
        if label not in _ENCODINGS:
            register_encoding(label, encoding)


def available_encodings() -> list[str]:
    _register_builtin_encodings()
    return sorted(_ENCODINGS)


def get_encoding(encoding: EncodingLike) -> Encoding:
    """Resolve a label to its rule set; an :class:`Encoding` passes through.

    :raises UnknownEncoding: If the label is not registered.
    """
    if isinstance(encoding, Encoding):
        return encoding
    _register_builtin_encodings()
    try:
        return _ENCODINGS[encoding.lower()]
    except KeyError:
        raise UnknownEncoding(
            f"Unknown encoding '{encoding}'. Registered encodings: {sorted(_ENCODINGS)}",
            encoding=encoding,
        ) from None


def path_class(encoding: EncodingLike, *, text: bool, owned: bool = False) -> type[Path] | type[PathBuf]:
    """Return the concrete path class for a rule set and unit type."""
    view, buf = flavor(get_encoding(encoding), text=text)
    return buf if owned else view


def typed_path(raw: RawPath, encoding: EncodingLike = "native") -> Path:
    """Wrap ``raw`` in the view class chosen at runtime by ``encoding`` and its type.

    Example: ``typed_path("C:\\\\data", "windows")`` returns a ``Utf8WindowsPath``.
    """
    cls = path_class(encoding, text=isinstance(raw, str))
    return cls(raw)  # type: ignore[return-value]


def typed_path_buf(raw: RawPath, encoding: EncodingLike = "native") -> PathBuf:
    """Owned counterpart of :func:`typed_path`."""
    cls = path_class(encoding, text=isinstance(raw, str), owned=True)
    return cls(raw)  # type: ignore[return-value]
