"""Encoding: an immutable description of one platform's path grammar."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from typed_path._component import Prefix
    from typed_path._types import RawPath

    PrefixParser = Callable[["RawPath", "Units"], Optional[Prefix]]


@dataclasses.dataclass(frozen=True)
class Units:
    """Rule-set constants materialized for one unit type (``str`` or ``bytes``).

    The parsing algorithms never branch on the unit type. They compare
    single-unit slices (``raw[i:i + 1]``) against these tables, which works
    the same way for text and raw bytes.
    """

    text: bool
    separator: RawPath
    separators: tuple[RawPath, ...]
    verbatim_separators: tuple[RawPath, ...]
    disallowed: frozenset[RawPath]
    current: RawPath
    parent: RawPath
    empty: RawPath
    verbatim_marker: RawPath

    @classmethod
    def build(cls, encoding: Encoding, *, text: bool) -> Units:
        def lit(s: str) -> RawPath:
            return s if text else s.encode("ascii")

        return cls(
            text=text,
            separator=lit(encoding.separator),
            separators=tuple(lit(s) for s in encoding.separators),
            verbatim_separators=tuple(lit(s) for s in encoding.verbatim_separators or encoding.separators),
            disallowed=frozenset(lit(s) for s in encoding.disallowed),
            current=lit("."),
            parent=lit(".."),
            empty=lit(""),
            verbatim_marker=lit(encoding.verbatim_marker),
        )

    def lit(self, s: str) -> RawPath:
        """Convert an ASCII literal to this unit type."""
        return s if self.text else s.encode("ascii")


def iter_units(raw: RawPath) -> Iterator[RawPath]:
    """Yield single-unit slices of ``raw``, as ``str`` or ``bytes`` of length one."""
    for i in range(len(raw)):
        yield raw[i : i + 1]


@dataclasses.dataclass(frozen=True)
class Encoding:
    """Path grammar of one platform convention.

    Instances are process-wide constants and never hold path data. The shared
    parser, normalizer and composer read these fields instead of dispatching
    on a subclass.

    :param label: Short identifier (e.g. ``"posix"``, ``"windows"``).
    :param separator: Separator written when rendering paths.
    :param separators: Every character recognized as a separator.
    :param disallowed: Characters that make a normal component invalid.
    :param verbatim_separators: Separators recognized in a verbatim path.
        Empty means the same as ``separators``.
    :param absolute_requires_prefix: Whether a root alone is not enough to make
        a path absolute.
    :param verbatim_marker: Exact leading text that switches off separator and
        ``.`` normalization (``\\\\?\\`` on Windows). Empty when unsupported.
    :param parse_prefix: Prefix grammar, or ``None`` when the platform has none.
    """

    label: str
    separator: str
    separators: tuple[str, ...]
    disallowed: frozenset[str]
    verbatim_separators: tuple[str, ...] = ()
    absolute_requires_prefix: bool = False
    verbatim_marker: str = ""
    parse_prefix: Optional[PrefixParser] = dataclasses.field(default=None, compare=False, repr=False)
    _text_units: Units = dataclasses.field(init=False, repr=False, compare=False)
    _byte_units: Units = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.separator not in self.separators:
            raise ValueError(f"separator {self.separator!r} must be one of {self.separators!r}")
        object.__setattr__(self, "_text_units", Units.build(self, text=True))
        object.__setattr__(self, "_byte_units", Units.build(self, text=False))

    @property
    def has_prefixes(self) -> bool:
        return self.parse_prefix is not None

    def units(self, like: RawPath) -> Units:
        """Return the constant table matching the unit type of ``like``."""
        return self._text_units if isinstance(like, str) else self._byte_units

    def find_prefix(self, raw: RawPath) -> Prefix | None:
        """Recognize a prefix at the start of ``raw``."""
        if self.parse_prefix is None:
            return None
        return self.parse_prefix(raw, self.units(raw))

    def is_verbatim(self, raw: RawPath) -> bool:
        """Whether ``raw`` is spelled verbatim: only ``verbatim_separators`` split it and ``.`` is kept."""
        marker = self.units(raw).verbatim_marker
        return bool(marker) and raw.startswith(marker)  # type: ignore[arg-type]

    def is_separator(self, unit: RawPath) -> bool:
        return unit in self.units(unit).separators

    def is_valid_segment(self, segment: RawPath) -> bool:
        """Whether ``segment`` may appear as a normal component."""
        disallowed = self.units(segment).disallowed
        return not any(u in disallowed for u in iter_units(segment))

    def __str__(self) -> str:
        return self.label
