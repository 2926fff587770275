"""Windows rule set: prefix grammar and path classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typed_path._component import Prefix, PrefixKind
from typed_path._encoding import Encoding
from typed_path._path import Path, PathBuf, register_flavor

if TYPE_CHECKING:
    from collections.abc import Callable

    from typed_path._encoding import Units
    from typed_path._types import RawPath

    _Rule = Callable[[RawPath, Units], "Prefix | None"]


# region: prefix grammar


def _is_sep(raw: RawPath, i: int, units: Units) -> bool:
    return raw[i : i + 1] in units.separators


def _name_end(raw: RawPath, start: int, separators: tuple[RawPath, ...]) -> int:
    end = start
    while end < len(raw) and raw[end : end + 1] not in separators:
        end += 1
    return end


def _is_drive_letter(unit: RawPath) -> bool:
    return len(unit) == 1 and unit.isascii() and unit.isalpha()


def _verbatim_start(raw: RawPath, units: Units) -> int | None:
    """Offset after ``\\\\?\\`` (either separator), if ``raw`` starts with it."""
    if _is_sep(raw, 0, units) and _is_sep(raw, 1, units) and raw[2:3] == units.lit("?") and _is_sep(raw, 3, units):
        return 4
    return None


def _verbatim_separators(raw: RawPath, units: Units) -> tuple[RawPath, ...]:
    """Only the exact ``\\\\?\\`` spelling restricts names to backslash separators."""
    if units.verbatim_marker and raw.startswith(units.verbatim_marker):  # type: ignore[arg-type]
        return units.verbatim_separators
    return units.separators


def _server_share(
    raw: RawPath, start: int, units: Units, separators: tuple[RawPath, ...]
) -> tuple[RawPath, RawPath, int] | None:
    """Parse ``server[\\share]`` at ``start``; the server must not be empty."""
    server_end = _name_end(raw, start, separators)
    if server_end == start:
        return None
    server = raw[start:server_end]
    if raw[server_end : server_end + 1] in separators:
        share_end = _name_end(raw, server_end + 1, separators)
        if share_end > server_end + 1:
            return server, raw[server_end + 1 : share_end], share_end
    return server, units.empty, server_end


def _verbatim_unc(raw: RawPath, units: Units) -> Prefix | None:
    start = _verbatim_start(raw, units)
    if start is None or raw[start : start + 3] != units.lit("UNC") or not _is_sep(raw, start + 3, units):
        return None
    parsed = _server_share(raw, start + 4, units, _verbatim_separators(raw, units))
    if parsed is None:
        return None
    server, share, end = parsed
    return Prefix(PrefixKind.VERBATIM_UNC, raw[:end], server=server, share=share)


def _verbatim_disk(raw: RawPath, units: Units) -> Prefix | None:
    start = _verbatim_start(raw, units)
    if start is None or not _is_drive_letter(raw[start : start + 1]) or raw[start + 1 : start + 2] != units.lit(":"):
        return None
    return Prefix(PrefixKind.VERBATIM_DISK, raw[: start + 2], letter=raw[start : start + 1])


def _verbatim(raw: RawPath, units: Units) -> Prefix | None:
    start = _verbatim_start(raw, units)
    if start is None:
        return None
    end = _name_end(raw, start, _verbatim_separators(raw, units))
    name = raw[start:end]
    if not name or name == units.lit("UNC"):
        return None
    return Prefix(PrefixKind.VERBATIM, raw[:end], name=name)


def _device_ns(raw: RawPath, units: Units) -> Prefix | None:
    if not (_is_sep(raw, 0, units) and _is_sep(raw, 1, units)):
        return None
    if raw[2:3] != units.lit(".") or not _is_sep(raw, 3, units):
        return None
    end = _name_end(raw, 4, units.separators)
    if end == 4:
        return None
    return Prefix(PrefixKind.DEVICE_NS, raw[:end], name=raw[4:end])


def _unc(raw: RawPath, units: Units) -> Prefix | None:
    if not (_is_sep(raw, 0, units) and _is_sep(raw, 1, units)):
        return None
    parsed = _server_share(raw, 2, units, units.separators)
    if parsed is None:
        return None
    server, share, end = parsed
    return Prefix(PrefixKind.UNC, raw[:end], server=server, share=share)


def _disk(raw: RawPath, units: Units) -> Prefix | None:
    if _is_drive_letter(raw[0:1]) and raw[1:2] == units.lit(":"):
        return Prefix(PrefixKind.DISK, raw[:2], letter=raw[0:1])
    return None


# Most specific first; the first rule that matches wins.
_PREFIX_RULES: tuple[_Rule, ...] = (_verbatim_unc, _verbatim_disk, _verbatim, _device_ns, _unc, _disk)


def parse_prefix(raw: RawPath, units: Units) -> Prefix | None:
    """Recognize a Windows prefix at the start of ``raw``."""
    for rule in _PREFIX_RULES:
        prefix = rule(raw, units)
        if prefix is not None:
            return prefix
    return None


# endregion

WINDOWS = Encoding(
    label="windows",
    separator="\\",
    separators=("\\", "/"),
    verbatim_separators=("\\",),
    disallowed=frozenset({"\\", "/", ":", "?", "*", '"', ">", "<", "|", "\0"}),
    absolute_requires_prefix=True,
    verbatim_marker="\\\\?\\",
    parse_prefix=parse_prefix,
)


class WindowsPath(Path):
    """Immutable Windows-style path over raw bytes."""

    __slots__ = ()
    encoding = WINDOWS
    _text = False


class WindowsPathBuf(PathBuf):
    """Owned Windows-style path buffer over raw bytes."""

    __slots__ = ()
    encoding = WINDOWS
    _text = False


class Utf8WindowsPath(Path):
    """Immutable Windows-style path over text."""

    __slots__ = ()
    encoding = WINDOWS
    _text = True


class Utf8WindowsPathBuf(PathBuf):
    """Owned Windows-style path buffer over text."""

    __slots__ = ()
    encoding = WINDOWS
    _text = True


register_flavor(WindowsPath, WindowsPathBuf)
register_flavor(Utf8WindowsPath, Utf8WindowsPathBuf)
