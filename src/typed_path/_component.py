"""Component model: the syntactic units a path decomposes into."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from typed_path._encoding import Encoding
    from typed_path._types import RawPath


class PrefixKind(enum.Enum):
    """Windows prefix categories, in the order the grammar tries them."""

    VERBATIM_UNC = "verbatim_unc"
    VERBATIM_DISK = "verbatim_disk"
    VERBATIM = "verbatim"
    DEVICE_NS = "device_ns"
    UNC = "unc"
    DISK = "disk"

    @property
    def is_verbatim(self) -> bool:
        """Whether the prefix starts with ``\\\\?\\``."""
        return self in (PrefixKind.VERBATIM_UNC, PrefixKind.VERBATIM_DISK, PrefixKind.VERBATIM)


@dataclasses.dataclass(frozen=True)
class Prefix:
    """A parsed Windows prefix.

    Equality and hashing use the parsed fields only, so ``//server/share``
    and ``\\\\server\\share`` compare equal.

    :param kind: Prefix category.
    :param raw: The prefix exactly as written.
    :param letter: Drive letter for disk prefixes.
    :param server: Server name for UNC prefixes.
    :param share: Share name for UNC prefixes (may be empty).
    :param name: Device or verbatim name.
    """

    kind: PrefixKind
    raw: RawPath = dataclasses.field(compare=False)
    letter: Optional[RawPath] = None
    server: Optional[RawPath] = None
    share: Optional[RawPath] = None
    name: Optional[RawPath] = None

    @property
    def is_verbatim(self) -> bool:
        return self.kind.is_verbatim

    @property
    def implies_root(self) -> bool:
        """Whether the prefix makes the path rooted without a separator after it."""
        return self.kind not in (PrefixKind.DISK, PrefixKind.VERBATIM_DISK)

    def __len__(self) -> int:
        return len(self.raw)


class ComponentKind(enum.Enum):
    """Tag of a :class:`Component`."""

    PREFIX = "prefix"
    ROOT = "root"
    CURRENT = "current"
    PARENT = "parent"
    NORMAL = "normal"


@dataclasses.dataclass(frozen=True, eq=False)
class Component:
    """One syntactic unit of a parsed path.

    :param kind: What the component is.
    :param value: Its raw text: the prefix as written, the canonical separator
        for a root, ``.``, ``..``, or the segment itself.
    :param prefix: Parsed prefix data for ``PREFIX`` components.
    """

    kind: ComponentKind
    value: RawPath
    prefix: Optional[Prefix] = None

    @classmethod
    def root(cls, separator: RawPath) -> Component:
        return cls(ComponentKind.ROOT, separator)

    @classmethod
    def current(cls, value: RawPath = ".") -> Component:
        return cls(ComponentKind.CURRENT, value)

    @classmethod
    def parent(cls, value: RawPath = "..") -> Component:
        return cls(ComponentKind.PARENT, value)

    @classmethod
    def normal(cls, segment: RawPath) -> Component:
        return cls(ComponentKind.NORMAL, segment)

    @classmethod
    def of_prefix(cls, prefix: Prefix) -> Component:
        return cls(ComponentKind.PREFIX, prefix.raw, prefix)

    @property
    def is_normal(self) -> bool:
        return self.kind is ComponentKind.NORMAL

    def is_valid(self, encoding: Encoding) -> bool:
        """Only normal components can be invalid, by holding a disallowed character."""
        if self.kind is ComponentKind.NORMAL:
            return encoding.is_valid_segment(self.value)
        return True

    def as_raw(self) -> RawPath:
        return self.value

    def _key(self) -> tuple[object, ...]:
        if self.kind is ComponentKind.PREFIX:
            return (self.kind, self.prefix)
        if self.kind is ComponentKind.ROOT:
            return (self.kind, type(self.value))
        return (self.kind, self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Component):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if self.kind is ComponentKind.PREFIX:
            return f"Component.of_prefix({self.prefix!r})"
        if self.kind is ComponentKind.ROOT:
            return f"Component.root({self.value!r})"
        return f"Component.{self.kind.value}({self.value!r})"
