"""Re-rendering a path under a different rule set."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typed_path._component import Component, ComponentKind
from typed_path._errors import EncodingConversionRejected
from typed_path._normalize import render
from typed_path._parser import Components

if TYPE_CHECKING:
    from typed_path._encoding import Encoding
    from typed_path._types import RawPath


def convert(raw: RawPath, source: Encoding, target: Encoding, *, checked: bool = False) -> RawPath:
    """Render the components of ``raw`` (parsed under ``source``) under ``target``.

    Prefixes are dropped; a prefix that implied a root leaves a root behind.
    Converting to the same rule set returns ``raw`` unchanged.

    :param checked: Re-validate every normal component against ``target``.
    :raises EncodingConversionRejected: If ``checked`` and a component is
        invalid under ``target``.
    """
    if source == target:
        return raw
    units = target.units(raw)
    out: list[Component] = []
    pending_root = False
    for component in Components(raw, source):
        if component.kind is ComponentKind.PREFIX:
            pending_root = component.prefix is not None and component.prefix.implies_root
            continue
        if component.kind is ComponentKind.ROOT:
            pending_root = True
            continue
        if pending_root:
            out.append(Component.root(units.separator))
            pending_root = False
        if component.kind is ComponentKind.NORMAL and checked and not target.is_valid_segment(component.value):
            raise EncodingConversionRejected(
                f"Component {component.value!r} is not valid under {target.label} rules",
                path=raw,
                encoding=target.label,
                component=component.value,
            )
        out.append(component)
    if pending_root:
        out.append(Component.root(units.separator))
    return render(out, units)
