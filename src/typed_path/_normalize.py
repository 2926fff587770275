"""Lexical normalization: resolving ``.`` and ``..`` without touching a filesystem."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typed_path._component import ComponentKind, PrefixKind
from typed_path._errors import CurrentDirUnavailable
from typed_path._parser import Components

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typed_path._component import Component
    from typed_path._encoding import Encoding, Units
    from typed_path._types import RawPath


def render(components: Iterable[Component], units: Units) -> RawPath:
    """Write a component sequence back out with the canonical separator."""
    pieces: list[RawPath] = []
    need_sep = False
    for component in components:
        if component.kind is ComponentKind.ROOT:
            pieces.append(units.separator)
            need_sep = False
            continue
        if need_sep:
            pieces.append(units.separator)
        pieces.append(component.value)
        # A prefix is followed directly by its root, or by the first name when it has none
        need_sep = component.kind is not ComponentKind.PREFIX
    return units.empty.join(pieces)  # type: ignore[arg-type]


def normalize_components(components: Iterable[Component]) -> list[Component]:
    """Fold ``.`` and cancellable ``..`` out of a component sequence.

    A ``..`` only cancels a preceding normal component. After a root, a
    prefix, another ``..`` or at the start of a relative path it is kept.
    """
    stack: list[Component] = []
    for component in components:
        if component.kind is ComponentKind.CURRENT:
            continue
        if component.kind is ComponentKind.PARENT and stack and stack[-1].kind is ComponentKind.NORMAL:
            stack.pop()
            continue
        stack.append(component)
    return stack


def normalize(raw: RawPath, encoding: Encoding) -> RawPath:
    return render(normalize_components(Components(raw, encoding)), encoding.units(raw))


def absolutize(raw: RawPath, encoding: Encoding, cwd: RawPath) -> RawPath:
    """Normalize ``raw``, joining it onto ``cwd`` first when it is not absolute.

    :raises CurrentDirUnavailable: If ``cwd`` is not absolute under ``encoding``.
    """
    from typed_path._compose import push

    path = Components(raw, encoding)
    if path.is_absolute():
        return normalize(raw, encoding)

    base = Components(cwd, encoding)
    if not base.is_absolute():
        raise CurrentDirUnavailable(
            "Current directory is not an absolute path",
            path=cwd,
            encoding=encoding.label,
        )

    # Drive-relative paths (C:foo) resolve against the current directory of the same drive
    prefix = path.prefix()
    cwd_prefix = base.prefix()
    if (
        prefix is not None
        and prefix.kind is PrefixKind.DISK
        and cwd_prefix is not None
        and cwd_prefix.letter is not None
        and prefix.letter is not None
        and prefix.letter.upper() == cwd_prefix.letter.upper()
    ):
        raw = raw[len(prefix) :]

    return normalize(push(cwd, raw, encoding), encoding)
