"""Component iteration: lazy, restartable, double-ended parsing of a raw path."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from typed_path._component import Component, ComponentKind, PrefixKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from typed_path._component import Prefix
    from typed_path._encoding import Encoding, Units
    from typed_path._types import RawPath


class _Head(NamedTuple):
    """Leading prefix, root and ``.`` components with the raw offset each one ends at."""

    items: tuple[tuple[Component, int], ...]
    prefix: Prefix | None
    physical_root: bool
    body_start: int
    separators: tuple[RawPath, ...]
    verbatim: bool


def _scan_head(raw: RawPath, encoding: Encoding, units: Units) -> _Head:
    items: list[tuple[Component, int]] = []
    pos = 0
    separators = units.separators

    # Only the exact verbatim spelling switches off separator and "." normalization
    verbatim = encoding.is_verbatim(raw)
    if verbatim:
        separators = units.verbatim_separators

    prefix = encoding.find_prefix(raw)
    if prefix is not None:
        pos = len(prefix.raw)
        items.append((Component.of_prefix(prefix), pos))

    physical_root = raw[pos : pos + 1] in separators
    if physical_root:
        items.append((Component.root(units.separator), pos + 1))
        while raw[pos : pos + 1] in separators:
            pos += 1

    # A leading "." survives only on paths with no root of any kind
    implicit_root = prefix is not None and prefix.kind is not PrefixKind.DISK
    if not physical_root and not implicit_root and raw[pos : pos + 1] == units.current:
        following = raw[pos + 1 : pos + 2]
        if not following or following in separators:
            items.append((Component.current(units.current), pos + 1))
            pos += 1

    return _Head(tuple(items), prefix, physical_root, pos, separators, verbatim)


class ComponentIterator:
    """Cursor over one raw path.

    Holds the buffer, the rule-set tables and two positions. Forward
    (``next``) and backward (:meth:`next_back`) steps may be mixed; the
    cursor never yields a component twice. Interior ``.`` segments are
    skipped unless the path is spelled verbatim.
    """

    __slots__ = ("_raw", "_units", "_seps", "_head", "_head_lo", "_head_hi", "_front", "_back")

    def __init__(self, raw: RawPath, encoding: Encoding) -> None:
        self._raw = raw
        self._units = encoding.units(raw)
        self._head = _scan_head(raw, encoding, self._units)
        self._seps = self._head.separators
        self._head_lo = 0
        self._head_hi = len(self._head.items)
        self._front = self._head.body_start
        self._back = len(raw)

    def __iter__(self) -> ComponentIterator:
        return self

    def _classify(self, segment: RawPath) -> Component | None:
        if segment == self._units.current:
            return Component.current(segment) if self._head.verbatim else None
        if segment == self._units.parent:
            return Component.parent(segment)
        return Component.normal(segment)

    def __next__(self) -> Component:
        if self._head_lo < self._head_hi:
            component = self._head.items[self._head_lo][0]
            self._head_lo += 1
            return component
        raw, seps = self._raw, self._seps
        while True:
            while self._front < self._back and raw[self._front : self._front + 1] in seps:
                self._front += 1
            if self._front >= self._back:
                raise StopIteration
            end = self._front
            while end < self._back and raw[end : end + 1] not in seps:
                end += 1
            segment = raw[self._front : end]
            self._front = end
            component = self._classify(segment)
            if component is not None:
                return component

    def next_back(self) -> Component | None:
        """Consume and return the last remaining component, or ``None``."""
        raw, seps = self._raw, self._seps
        while True:
            while self._back > self._front and raw[self._back - 1 : self._back] in seps:
                self._back -= 1
            if self._back <= self._front:
                break
            start = self._back
            while start > self._front and raw[start - 1 : start] not in seps:
                start -= 1
            segment = raw[start : self._back]
            self._back = start
            component = self._classify(segment)
            if component is not None:
                return component
        if self._head_hi > self._head_lo:
            self._head_hi -= 1
            return self._head.items[self._head_hi][0]
        return None

    @property
    def back_offset(self) -> int:
        """Raw offset where the component last returned by :meth:`next_back` starts."""
        return self._back

    def rest(self) -> RawPath:
        """Raw text of the components not yet consumed from the back.

        Trailing separators and skipped ``.`` segments are trimmed. Only
        meaningful while nothing was consumed from the front.
        """
        raw, seps, current = self._raw, self._seps, self._units.current
        back = self._back
        while back > self._front:
            if raw[back - 1 : back] in seps:
                back -= 1
            elif (
                not self._head.verbatim
                and raw[back - 1 : back] == current
                and (back - 1 == self._front or raw[back - 2 : back - 1] in seps)
            ):
                back -= 1
            else:
                return raw[:back]
        if self._head_hi:
            return raw[: self._head.items[self._head_hi - 1][1]]
        return raw[:0]

    def rest_front(self) -> RawPath:
        """Raw text of the components not yet consumed from the front."""
        raw, seps = self._raw, self._seps
        if self._head_lo < self._head_hi:
            start = self._head.items[self._head_lo - 1][1] if self._head_lo else 0
            return raw[start : self._back]
        front = self._front
        while front < self._back and raw[front : front + 1] in seps:
            front += 1
        return raw[front : self._back]


class _Reversed:
    __slots__ = ("_cursor",)

    def __init__(self, cursor: ComponentIterator) -> None:
        self._cursor = cursor

    def __iter__(self) -> _Reversed:
        return self

    def __next__(self) -> Component:
        component = self._cursor.next_back()
        if component is None:
            raise StopIteration
        return component


class Components:
    """Re-iterable component view of a raw path under one rule set.

    Nothing is cached: each ``iter()`` or ``reversed()`` call parses the
    buffer again from scratch.

    :param raw: The path text or bytes.
    :param encoding: Rule set to parse with.
    """

    __slots__ = ("_raw", "_encoding")

    def __init__(self, raw: RawPath, encoding: Encoding) -> None:
        self._raw = raw
        self._encoding = encoding

    def __iter__(self) -> ComponentIterator:
        return ComponentIterator(self._raw, self._encoding)

    def __reversed__(self) -> Iterator[Component]:
        return _Reversed(ComponentIterator(self._raw, self._encoding))

    def __repr__(self) -> str:
        return f"Components({list(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Components):
            return list(self) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self))

    @property
    def encoding(self) -> Encoding:
        return self._encoding

    def _head(self) -> _Head:
        return _scan_head(self._raw, self._encoding, self._encoding.units(self._raw))

    def prefix(self) -> Prefix | None:
        return self._head().prefix

    def has_root(self) -> bool:
        """A physical root, or a prefix that implies one (UNC, device, verbatim)."""
        head = self._head()
        return head.physical_root or (head.prefix is not None and head.prefix.implies_root)

    def is_absolute(self) -> bool:
        if not self._encoding.absolute_requires_prefix:
            return self.has_root()
        head = self._head()
        if head.prefix is None:
            return False
        return head.prefix.is_verbatim or head.physical_root or head.prefix.implies_root
