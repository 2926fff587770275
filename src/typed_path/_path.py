"""Path value objects: immutable views and owned, growable buffers."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Optional, Union

from typed_path import _compose, _convert, _normalize
from typed_path._component import ComponentKind
from typed_path._errors import InvalidComponent, StripPrefixError
from typed_path._parser import ComponentIterator, Components

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from typed_path._component import Prefix
    from typed_path._encoding import Encoding, Units
    from typed_path._types import CurrentDirProvider, RawPath

PathInput = Union[str, bytes, "BasePath"]  # noqa: UP007
EncodingTarget = Union["type[BasePath]", "Encoding", str]  # noqa: UP007

# Concrete classes per (encoding, is_text): (view, owned)
_FLAVORS: dict[tuple[Encoding, bool], tuple[type[Path], type[PathBuf]]] = {}


def register_flavor(view: type[Path], owned: type[PathBuf]) -> None:
    """Link a view class with its owned counterpart and make both discoverable."""
    if view.encoding != owned.encoding or view._text != owned._text:
        raise TypeError(f"{view.__name__} and {owned.__name__} must share an encoding and unit type")
    for cls in (view, owned):
        cls._view_type = view
        cls._owned_type = owned
    _FLAVORS[(view.encoding, view._text)] = (view, owned)


def flavor(encoding: Encoding, *, text: bool) -> tuple[type[Path], type[PathBuf]]:
    """Return the ``(view, owned)`` classes for ``encoding``, creating them on first use."""
    key = (encoding, text)
    if key not in _FLAVORS:
        stem = ("Utf8" if text else "") + encoding.label.title()
        attrs: dict[str, object] = {"__slots__": (), "encoding": encoding, "_text": text}
        view = type(f"{stem}Path", (Path,), dict(attrs))
        owned = type(f"{stem}PathBuf", (PathBuf,), dict(attrs))
        register_flavor(view, owned)  # type: ignore[arg-type]
    return _FLAVORS[key]


def _split_extension(name: RawPath, units: Units) -> tuple[RawPath, Optional[RawPath]]:
    if name == units.parent:
        return name, None
    dot = name.rfind(units.lit("."))  # type: ignore[arg-type]
    if dot <= 0:
        return name, None
    return name[:dot], name[dot + 1 :]


class BasePath:
    """Operations shared by borrowed views and owned buffers.

    Subclasses fix ``encoding`` and the unit type at class level, so paths
    under different rule sets are different types and never mix silently.
    """

    __slots__ = ("_raw",)

    encoding: ClassVar[Encoding]
    _text: ClassVar[bool]
    _view_type: ClassVar[type[Path]]
    _owned_type: ClassVar[type[PathBuf]]
    _raw: RawPath

    @classmethod
    def _empty(cls) -> RawPath:
        return "" if getattr(cls, "_text", True) else b""

    @classmethod
    def _coerce(cls, value: PathInput) -> RawPath:
        if not hasattr(cls, "encoding"):
            raise TypeError(f"{cls.__name__} has no encoding; use a concrete flavor such as PosixPath")
        if isinstance(value, BasePath):
            if value.encoding != cls.encoding:
                raise TypeError(
                    f"Cannot mix {value.encoding.label} and {cls.encoding.label} paths; "
                    "convert with with_encoding() first"
                )
            value = value._raw
        if cls._text:
            if not isinstance(value, str):
                raise TypeError(f"{cls.__name__} expects str, got {type(value).__name__}")
            return value
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"{cls.__name__} expects bytes, got {type(value).__name__}")
        return bytes(value)

    @classmethod
    def _coerce_segment(cls, value: RawPath) -> RawPath:
        expected = str if cls._text else bytes
        if not isinstance(value, expected):
            raise TypeError(f"{cls.__name__} expects {expected.__name__}, got {type(value).__name__}")
        return value

    def _view(self, raw: RawPath) -> Path:
        return self._view_type._from_raw(raw)

    def _owned(self, raw: RawPath) -> PathBuf:
        return self._owned_type._from_raw(raw)

    @property
    def _units(self) -> Units:
        return self.encoding.units(self._raw)

    def as_raw(self) -> RawPath:
        """The underlying text or bytes."""
        return self._raw

    # region: parsing and queries

    def components(self) -> Components:
        return Components(self._raw, self.encoding)

    def __iter__(self) -> Iterator[RawPath]:
        return (c.value for c in self.components())

    @property
    def parts(self) -> tuple[RawPath, ...]:
        """Raw value of every component, prefix and root included."""
        return tuple(self)

    def is_empty(self) -> bool:
        return not self._raw

    def has_root(self) -> bool:
        return self.components().has_root()

    def is_absolute(self) -> bool:
        return self.components().is_absolute()

    def is_relative(self) -> bool:
        return not self.is_absolute()

    @property
    def prefix(self) -> Prefix | None:
        return self.components().prefix()

    @property
    def file_name(self) -> RawPath | None:
        """Final component if it is a normal one; ``None`` for roots, ``.`` and ``..``."""
        last = ComponentIterator(self._raw, self.encoding).next_back()
        if last is not None and last.kind is ComponentKind.NORMAL:
            return last.value
        return None

    @property
    def file_stem(self) -> RawPath | None:
        name = self.file_name
        if name is None:
            return None
        return _split_extension(name, self._units)[0]

    @property
    def extension(self) -> RawPath | None:
        """Text after the final dot of the file name, without the dot.

        A leading dot does not start an extension (``.gitignore`` has none).
        """
        name = self.file_name
        if name is None:
            return None
        return _split_extension(name, self._units)[1]

    @property
    def parent(self) -> Path | None:
        """Path without its final component, or ``None`` for a bare root or prefix.

        Example: ``PosixPath(b"a/b").parent`` is ``PosixPath(b"a")`` and
        ``PosixPath(b"a").parent`` is the empty path.
        """
        cursor = ComponentIterator(self._raw, self.encoding)
        last = cursor.next_back()
        if last is None or last.kind in (ComponentKind.PREFIX, ComponentKind.ROOT):
            return None
        return self._view(cursor.rest())

    def ancestors(self) -> Iterator[Path]:
        """Yield the path itself, then each successive parent."""
        current: Path | None = self._view(self._raw)
        while current is not None:
            yield current
            current = current.parent

    def starts_with(self, base: PathInput) -> bool:
        """Component-wise prefix test (``/etc/passwd`` starts with ``/etc``, not ``/e``)."""
        mine = iter(self.components())
        return all(next(mine, None) == c for c in Components(self._coerce(base), self.encoding))

    def ends_with(self, child: PathInput) -> bool:
        mine = reversed(self.components())
        return all(next(mine, None) == c for c in reversed(Components(self._coerce(child), self.encoding)))

    def strip_prefix(self, base: PathInput) -> Path:
        """Return the part of the path after ``base``.

        :raises StripPrefixError: If the path does not start with ``base``.
        """
        base_raw = self._coerce(base)
        cursor = ComponentIterator(self._raw, self.encoding)
        for component in Components(base_raw, self.encoding):
            if next(cursor, None) != component:
                raise StripPrefixError(
                    f"{self._raw!r} does not start with {base_raw!r}",
                    path=self._raw,
                    encoding=self.encoding.label,
                )
        return self._view(cursor.rest_front())

    def is_valid(self) -> bool:
        """Whether every normal component is free of disallowed characters."""
        return all(c.is_valid(self.encoding) for c in self.components())

    def validate(self) -> None:
        """Raise for the first invalid component.

        :raises InvalidComponent: If a normal component holds a disallowed character.
        """
        for component in self.components():
            if not component.is_valid(self.encoding):
                raise InvalidComponent(
                    f"Component {component.value!r} contains a character disallowed by {self.encoding.label} rules",
                    path=self._raw,
                    encoding=self.encoding.label,
                    component=component.value,
                )

    # endregion

    # region: derived paths

    def to_path_buf(self) -> PathBuf:
        return self._owned(self._raw)

    def join(self, path: PathInput) -> PathBuf:
        """Unchecked join. See :func:`typed_path._compose.push` for the rules."""
        return self._owned(_compose.push(self._raw, self._coerce(path), self.encoding))

    def join_checked(self, path: PathInput) -> PathBuf:
        """Join a relative fragment that cannot escape this path.

        :raises CheckedAppendRejected: If the fragment is absolute, prefixed,
            holds an invalid character, or would traverse out of this path.
        """
        return self._owned(_compose.push_checked(self._raw, self._coerce(path), self.encoding))

    def __truediv__(self, other: PathInput) -> PathBuf:
        return self.join(other)

    def with_file_name(self, file_name: RawPath) -> PathBuf:
        buf = self.to_path_buf()
        buf.set_file_name(file_name)
        return buf

    def with_extension(self, extension: RawPath) -> PathBuf:
        buf = self.to_path_buf()
        buf.set_extension(extension)
        return buf

    def normalize(self) -> PathBuf:
        """Resolve ``.`` and ``..`` lexically.

        ``..`` that cannot cancel a preceding named component is kept, so
        ``../a`` and ``/../a`` are already normalized.
        """
        return self._owned(_normalize.normalize(self._raw, self.encoding))

    def absolutize(self, cwd: PathInput | CurrentDirProvider | None = None) -> PathBuf:
        """Normalize, joining onto the current directory first if the path is relative.

        :param cwd: Current directory as a path, raw value or zero-argument
            provider. ``None`` reads the process working directory.
        :raises CurrentDirUnavailable: If the current directory cannot be read
            or is not absolute under this path's rules.
        """
        if self.is_absolute():
            return self.normalize()
        return self._owned(_normalize.absolutize(self._raw, self.encoding, self._current_dir_raw(cwd)))

    def _current_dir_raw(self, cwd: PathInput | CurrentDirProvider | None) -> RawPath:
        if cwd is None:
            from typed_path._native import current_dir, current_dir_text

            cwd = current_dir_text if self._text else current_dir
        if callable(cwd):
            cwd = cwd()
        if isinstance(cwd, BasePath):
            cwd = cwd.as_raw()
        return self._coerce_segment(cwd)

    def _target_owned(self, target: EncodingTarget) -> type[PathBuf]:
        if isinstance(target, type) and issubclass(target, BasePath):
            if target._text != self._text:
                raise TypeError("with_encoding() keeps the unit type; use to_text() or to_bytes() first")
            return target._owned_type
        if isinstance(target, str):
            from typed_path._registry import get_encoding

            target = get_encoding(target)
        return flavor(target, text=self._text)[1]

    def with_encoding(self, target: EncodingTarget) -> PathBuf:
        """Re-render under another rule set, dropping prefixes it cannot express."""
        owned = self._target_owned(target)
        return owned._from_raw(_convert.convert(self._raw, self.encoding, owned.encoding))

    def with_encoding_checked(self, target: EncodingTarget) -> PathBuf:
        """Like :meth:`with_encoding`, but fail on components invalid under the target.

        :raises EncodingConversionRejected: If a component becomes invalid.
        """
        owned = self._target_owned(target)
        return owned._from_raw(_convert.convert(self._raw, self.encoding, owned.encoding, checked=True))

    def to_text(self) -> PathBuf:
        """UTF-8 flavor of this path under the same rule set.

        :raises UnicodeDecodeError: If the bytes are not valid UTF-8.
        """
        raw = self._raw if isinstance(self._raw, str) else self._raw.decode("utf-8")
        return flavor(self.encoding, text=True)[1]._from_raw(raw)

    def to_bytes(self) -> PathBuf:
        raw = self._raw.encode("utf-8") if isinstance(self._raw, str) else self._raw
        return flavor(self.encoding, text=False)[1]._from_raw(raw)

    # endregion

    def __str__(self) -> str:
        if isinstance(self._raw, str):
            return self._raw
        return self._raw.decode("utf-8", errors="replace")

    def __bytes__(self) -> bytes:
        if isinstance(self._raw, str):
            return self._raw.encode("utf-8")
        return self._raw

    def __fspath__(self) -> RawPath:
        from typed_path._native import NATIVE

        if self.encoding != NATIVE:
            raise TypeError(
                f"{type(self).__name__} follows {self.encoding.label} rules and this host uses "
                f"{NATIVE.label}; convert with with_encoding() first"
            )
        return self._raw

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BasePath):
            return NotImplemented
        if other.encoding != self.encoding or other._text != self._text:
            return False
        return list(self.components()) == list(other.components())

    def __hash__(self) -> int:
        return hash((self.encoding.label, self._text, tuple(self.components())))


class Path(BasePath):
    """An immutable, hashable view over a raw path.

    :param raw: Text or bytes (matching the flavor) or another path of the
        same encoding. Parsing never fails.
    """

    __slots__ = ()

    def __init__(self, raw: PathInput | None = None) -> None:
        value = self._empty() if raw is None else self._coerce(raw)
        object.__setattr__(self, "_raw", value)

    @classmethod
    def _from_raw(cls, raw: RawPath) -> Path:
        p = object.__new__(cls)
        object.__setattr__(p, "_raw", raw)
        return p

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable: cannot delete '{name}'")


class PathBuf(BasePath):
    """An owned, mutable path buffer.

    :param raw: Initial content; empty when omitted.
    """

    __slots__ = ()
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, raw: PathInput | None = None) -> None:
        self._raw = self._empty() if raw is None else self._coerce(raw)

    @classmethod
    def _from_raw(cls, raw: RawPath) -> PathBuf:
        p = object.__new__(cls)
        p._raw = raw
        return p

    def as_path(self) -> Path:
        """Immutable view of the current content (no copy)."""
        return self._view(self._raw)

    def copy(self) -> PathBuf:
        return self._owned(self._raw)

    def clear(self) -> None:
        self._raw = self._empty()

    def push(self, path: PathInput) -> None:
        """Unchecked push. An absolute fragment replaces the whole buffer."""
        self._raw = _compose.push(self._raw, self._coerce(path), self.encoding)

    def push_checked(self, path: PathInput) -> None:
        """Push a fragment only if it stays inside the current path.

        The buffer is left untouched when the fragment is rejected.

        :raises CheckedAppendRejected: If the fragment is rejected.
        """
        self._raw = _compose.push_checked(self._raw, self._coerce(path), self.encoding)

    def extend(self, paths: Iterable[PathInput]) -> None:
        for path in paths:
            self.push(path)

    def __itruediv__(self, other: PathInput) -> PathBuf:
        self.push(other)
        return self

    def pop(self) -> bool:
        """Truncate to the parent. Returns ``False`` if there is no parent."""
        parent = self.parent
        if parent is None:
            return False
        self._raw = parent.as_raw()
        return True

    def set_file_name(self, file_name: RawPath) -> None:
        """Replace the final normal component, or append one if there is none."""
        name = self._coerce_segment(file_name)
        if self.file_name is not None:
            self.pop()
        self.push(name)

    def set_extension(self, extension: RawPath) -> bool:
        """Replace the extension; an empty one removes it.

        Returns ``False`` and changes nothing when there is no file name.
        """
        ext = self._coerce_segment(extension)
        cursor = ComponentIterator(self._raw, self.encoding)
        last = cursor.next_back()
        if last is None or last.kind is not ComponentKind.NORMAL:
            return False
        units = self._units
        stem, _ = _split_extension(last.value, units)
        end = cursor.back_offset + len(stem)
        if ext:
            self._raw = self._raw[:end] + units.lit(".") + ext  # type: ignore[operator]
        else:
            self._raw = self._raw[:end]
        return True
