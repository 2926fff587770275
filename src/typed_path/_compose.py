"""Path composition: unchecked push and traversal-safe checked push."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typed_path._component import Component, ComponentKind, PrefixKind
from typed_path._errors import CheckedAppendRejected, Rejection
from typed_path._normalize import normalize_components, render
from typed_path._parser import Components

if TYPE_CHECKING:
    from typed_path._encoding import Encoding
    from typed_path._types import RawPath


def append(current: RawPath, fragment: RawPath, encoding: Encoding) -> RawPath:
    """Concatenate with a separator in between when one is needed."""
    if not current:
        return fragment
    if not fragment:
        return current
    units = encoding.units(current)
    if current[-1:] in units.separators:
        return current + fragment  # type: ignore[operator]
    prefix = encoding.find_prefix(current)
    if prefix is not None and prefix.kind is PrefixKind.DISK and len(prefix) == len(current):
        return current + fragment  # type: ignore[operator]
    return current + units.separator + fragment  # type: ignore[operator]


def push(current: RawPath, fragment: RawPath, encoding: Encoding) -> RawPath:
    """Adjoin ``fragment`` to ``current`` without any safety checks.

    - an absolute or prefixed fragment replaces ``current``;
    - on a verbatim-prefixed ``current`` the fragment's ``.`` and ``..``
      are resolved eagerly, since the OS takes verbatim paths literally;
    - a rooted fragment keeps only the prefix of ``current``;
    - anything else is appended after a separator.
    """
    if not fragment:
        return current
    incoming = Components(fragment, encoding)
    if incoming.is_absolute() or incoming.prefix() is not None:
        return fragment

    base = Components(current, encoding)
    base_prefix = base.prefix()
    if base_prefix is not None and base_prefix.is_verbatim:
        stack: list[Component] = list(base)
        for component in incoming:
            if component.kind is ComponentKind.ROOT:
                del stack[1:]
                stack.append(component)
            elif component.kind is ComponentKind.CURRENT:
                continue
            elif component.kind is ComponentKind.PARENT:
                if stack and stack[-1].kind is ComponentKind.NORMAL:
                    stack.pop()
            else:
                stack.append(component)
        units = encoding.units(current)
        # A verbatim prefix is always written with a separator before the first name
        if len(stack) > 1 and stack[1].kind is not ComponentKind.ROOT:
            stack.insert(1, Component.root(units.separator))
        return render(stack, units)

    if incoming.has_root():
        keep = len(base_prefix) if base_prefix is not None else 0
        return current[:keep] + fragment  # type: ignore[operator]

    return append(current, fragment, encoding)


def check_fragment(base: RawPath, fragment: RawPath, encoding: Encoding) -> None:
    """Validate ``fragment`` for a checked append onto ``base``.

    The fragment may cancel its own components freely, and all but the first
    named component of the normalized base. The composed path therefore
    always stays under the base's prefix, root and top-level directory.

    :raises CheckedAppendRejected: On the first failing check.
    """
    incoming = Components(fragment, encoding)
    if incoming.is_absolute() or incoming.has_root():
        raise CheckedAppendRejected(
            "Fragment must be relative",
            path=fragment,
            encoding=encoding.label,
            reason=Rejection.NOT_RELATIVE,
        )
    if incoming.prefix() is not None:
        raise CheckedAppendRejected(
            "Fragment must not carry a prefix",
            path=fragment,
            encoding=encoding.label,
            reason=Rejection.UNEXPECTED_PREFIX,
        )
    for component in incoming:
        if not component.is_valid(encoding):
            raise CheckedAppendRejected(
                f"Invalid character in component {component.value!r}",
                path=fragment,
                encoding=encoding.label,
                reason=Rejection.INVALID_CHARACTER,
            )

    named = sum(1 for c in normalize_components(Components(base, encoding)) if c.kind is ComponentKind.NORMAL)
    budget = max(named - 1, 0)
    depth = 0
    for component in incoming:
        if component.kind is ComponentKind.NORMAL:
            depth += 1
        elif component.kind is ComponentKind.PARENT:
            if depth:
                depth -= 1
            elif budget:
                budget -= 1
            else:
                raise CheckedAppendRejected(
                    "Path traversal: fragment escapes the base path",
                    path=fragment,
                    encoding=encoding.label,
                    reason=Rejection.PATH_TRAVERSAL,
                )


def push_checked(current: RawPath, fragment: RawPath, encoding: Encoding) -> RawPath:
    """Append ``fragment`` as written after :func:`check_fragment` accepts it.

    On a verbatim base the fragment is re-rendered with the canonical
    separator first, since only that separator splits a verbatim path.
    """
    check_fragment(current, fragment, encoding)
    if encoding.is_verbatim(current):
        units = encoding.units(current)
        fragment = render((c for c in Components(fragment, encoding) if c.kind is not ComponentKind.CURRENT), units)
    return append(current, fragment, encoding)
