"""Tests for rule sets and the Windows prefix grammar."""

from __future__ import annotations

import pytest

from typed_path import POSIX, WINDOWS, Encoding, PrefixKind, Utf8WindowsPath, WindowsPath


class TestEncoding:
    def test_posix_constants(self) -> None:
        assert POSIX.separator == "/"
        assert POSIX.separators == ("/",)
        assert not POSIX.has_prefixes

    def test_windows_constants(self) -> None:
        assert WINDOWS.separator == "\\"
        assert set(WINDOWS.separators) == {"\\", "/"}
        assert WINDOWS.has_prefixes

    def test_separator_must_be_recognized(self) -> None:
        with pytest.raises(ValueError, match="separator"):
            Encoding(label="broken", separator="|", separators=("/",), disallowed=frozenset())

    def test_units_follow_input_type(self) -> None:
        assert WINDOWS.units("a").separator == "\\"
        assert WINDOWS.units(b"a").separator == b"\\"
        assert WINDOWS.units(b"a").parent == b".."

    def test_is_separator(self) -> None:
        assert WINDOWS.is_separator("/")
        assert WINDOWS.is_separator(b"\\")
        assert not POSIX.is_separator("\\")

    def test_posix_segment_validity(self) -> None:
        assert POSIX.is_valid_segment("a\\b:c")
        assert not POSIX.is_valid_segment("a\0b")
        assert not POSIX.is_valid_segment(b"a/b")

    @pytest.mark.parametrize("char", ["\\", "/", ":", "?", "*", '"', ">", "<", "|", "\0"])
    def test_windows_disallowed_characters(self, char: str) -> None:
        assert not WINDOWS.is_valid_segment(f"a{char}b")
        assert not WINDOWS.is_valid_segment(f"a{char}b".encode())

    def test_windows_allows_spaces_and_dots(self) -> None:
        assert WINDOWS.is_valid_segment("my file.tar.gz")

    def test_str_is_label(self) -> None:
        assert str(POSIX) == "posix"

    def test_hashable(self) -> None:
        assert len({POSIX, WINDOWS, POSIX}) == 2


class TestWindowsPrefix:
    def test_disk(self) -> None:
        prefix = WINDOWS.find_prefix("C:\\x")
        assert prefix is not None
        assert prefix.kind is PrefixKind.DISK
        assert prefix.letter == "C"
        assert prefix.raw == "C:"
        assert not prefix.implies_root

    def test_disk_requires_letter(self) -> None:
        assert WINDOWS.find_prefix("1:\\x") is None
        assert WINDOWS.find_prefix("ab:c") is None

    def test_unc(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\server\\share\\file.txt")
        assert prefix is not None
        assert prefix.kind is PrefixKind.UNC
        assert (prefix.server, prefix.share) == ("server", "share")
        assert prefix.raw == "\\\\server\\share"
        assert prefix.implies_root

    def test_unc_with_forward_slashes(self) -> None:
        assert WINDOWS.find_prefix("//server/share") == WINDOWS.find_prefix("\\\\server\\share")

    def test_unc_server_only(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\server")
        assert prefix is not None
        assert prefix.server == "server"
        assert prefix.share == ""

    def test_bare_double_separator_is_not_a_prefix(self) -> None:
        assert WINDOWS.find_prefix("\\\\") is None

    def test_device_namespace(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\.\\COM1")
        assert prefix is not None
        assert prefix.kind is PrefixKind.DEVICE_NS
        assert prefix.name == "COM1"

    def test_verbatim(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\?\\pictures\\kittens")
        assert prefix is not None
        assert prefix.kind is PrefixKind.VERBATIM
        assert prefix.name == "pictures"
        assert prefix.is_verbatim

    def test_verbatim_disk(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\?\\C:\\Users")
        assert prefix is not None
        assert prefix.kind is PrefixKind.VERBATIM_DISK
        assert prefix.letter == "C"
        assert prefix.raw == "\\\\?\\C:"
        assert not prefix.implies_root

    def test_verbatim_unc(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\?\\UNC\\server\\share\\file.txt")
        assert prefix is not None
        assert prefix.kind is PrefixKind.VERBATIM_UNC
        assert (prefix.server, prefix.share) == ("server", "share")
        assert prefix.raw == "\\\\?\\UNC\\server\\share"

    def test_bytes_prefix(self) -> None:
        prefix = WindowsPath(b"D:\\data").prefix
        assert prefix is not None
        assert prefix.letter == b"D"
        assert len(prefix) == 2

    def test_posix_has_no_prefixes(self) -> None:
        assert POSIX.find_prefix("C:\\x") is None

    def test_relative_path_has_no_prefix(self) -> None:
        assert Utf8WindowsPath("dir\\file").prefix is None


class TestPrefixNames:
    def test_device_name_holds_drive(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\.\\C:\\x")
        assert prefix is not None
        assert prefix.kind is PrefixKind.DEVICE_NS
        assert prefix.name == "C:"
        assert prefix.raw == "\\\\.\\C:"

    def test_unc_share_holds_colon(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\server\\share:x\\y")
        assert prefix is not None
        assert prefix.kind is PrefixKind.UNC
        assert prefix.share == "share:x"

    def test_unc_server_holds_colon(self) -> None:
        prefix = WINDOWS.find_prefix("//host:8080/share")
        assert prefix is not None
        assert (prefix.server, prefix.share) == ("host:8080", "share")

    def test_verbatim_name_holds_colon(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\?\\pics:x\\y")
        assert prefix is not None
        assert prefix.kind is PrefixKind.VERBATIM
        assert prefix.name == "pics:x"

    def test_exact_verbatim_name_ends_at_backslash_only(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\?\\pictures/x\\y")
        assert prefix is not None
        assert prefix.name == "pictures/x"

    def test_forward_slash_verbatim_name_ends_at_either_separator(self) -> None:
        prefix = WINDOWS.find_prefix("//?/pictures/x")
        assert prefix is not None
        assert prefix.kind is PrefixKind.VERBATIM
        assert prefix.name == "pictures"

    def test_forward_slash_verbatim_disk(self) -> None:
        prefix = WINDOWS.find_prefix("//?/C:/a")
        assert prefix is not None
        assert prefix.kind is PrefixKind.VERBATIM_DISK
        assert prefix.raw == "//?/C:"

    def test_exact_verbatim_unc_share_ends_at_backslash_only(self) -> None:
        prefix = WINDOWS.find_prefix("\\\\?\\UNC\\server\\sh/are\\x")
        assert prefix is not None
        assert prefix.kind is PrefixKind.VERBATIM_UNC
        assert prefix.share == "sh/are"


class TestVerbatimSpelling:
    def test_exact_spelling(self) -> None:
        assert WINDOWS.is_verbatim("\\\\?\\C:\\a")
        assert WINDOWS.is_verbatim(b"\\\\?\\C:\\a")

    def test_forward_slash_spelling_is_not_verbatim(self) -> None:
        assert not WINDOWS.is_verbatim("//?/C:/a")
        assert not WINDOWS.is_verbatim("\\\\?/C:/a")

    def test_posix_never_verbatim(self) -> None:
        assert not POSIX.is_verbatim("\\\\?\\C:\\a")
