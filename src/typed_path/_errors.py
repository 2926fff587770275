"""Error hierarchy for typed_path."""

from __future__ import annotations

import enum
from typing import Optional


class Rejection(enum.Enum):
    """Why a checked append refused a fragment, in the order checks run."""

    NOT_RELATIVE = "not_relative"
    UNEXPECTED_PREFIX = "unexpected_prefix"
    INVALID_CHARACTER = "invalid_character"
    PATH_TRAVERSAL = "path_traversal"


class TypedPathError(Exception):
    """Base class for all typed_path errors.

    :param message: Human-readable error description.
    :param path: The path involved in the error, if any.
    :param encoding: Label of the rule set involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[object] = None, encoding: Optional[str] = None) -> None:
        self.path = path
        self.encoding = encoding
        super().__init__(message)

    def _context(self) -> list[str]:
        parts = []
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.encoding is not None:
            parts.append(f"encoding={self.encoding!r}")
        return parts

    def __str__(self) -> str:
        parts = [str(self.args[0]) if self.args else "", *self._context()]
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.args[0] if self.args else ""), *self._context()]
        return f"{cls}({', '.join(args)})"


class InvalidComponent(TypedPathError):
    """Raised when a normal component holds a character the rule set disallows.

    :param component: The offending raw component.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[object] = None,
        encoding: Optional[str] = None,
        component: Optional[object] = None,
    ) -> None:
        self.component = component
        super().__init__(message, path=path, encoding=encoding)

    def _context(self) -> list[str]:
        parts = super()._context()
        if self.component is not None:
            parts.append(f"component={self.component!r}")
        return parts


class CheckedAppendRejected(TypedPathError):
    """Raised when a checked push or join refuses a fragment.

    :param reason: Which check rejected the fragment.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[object] = None,
        encoding: Optional[str] = None,
        reason: Rejection,
    ) -> None:
        self.reason = reason
        super().__init__(message, path=path, encoding=encoding)

    def _context(self) -> list[str]:
        return [*super()._context(), f"reason={self.reason.value!r}"]


class EncodingConversionRejected(InvalidComponent):
    """Raised when a checked conversion yields a component invalid under the target rule set."""


class CurrentDirUnavailable(TypedPathError, OSError):
    """Raised when the current directory cannot be read or is not absolute."""


class StripPrefixError(TypedPathError, ValueError):
    """Raised when a path does not start with the requested base."""


class UnknownEncoding(TypedPathError, KeyError):
    """Raised when a rule set label is not registered."""
