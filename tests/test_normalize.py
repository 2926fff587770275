"""Tests for lexical normalization and absolutize."""

from __future__ import annotations

import os

import pytest

from typed_path import (
    CurrentDirUnavailable,
    PosixPath,
    PosixPathBuf,
    Utf8NativePath,
    Utf8PosixPath,
    Utf8WindowsPath,
)

POSIX_CORPUS = [
    "",
    ".",
    "..",
    "/",
    "a/b/../c",
    "./a/./b/",
    "/../a",
    "../../x/../y",
    "a/../../b",
    "//a//b//",
    "/a/b/c/../../..",
]

WINDOWS_CORPUS = [
    "C:\\a\\..\\b",
    "C:a\\..\\..\\b",
    "\\\\server\\share\\x\\..\\y",
    "\\\\?\\C:\\a\\.\\b",
    "C:/mixed\\seps/",
    "\\a\\..",
]


class TestNormalize:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/a/./b/../c", "/a/c"),
            ("a/b/..", "a"),
            ("a/../..", ".."),
            ("../a", "../a"),
            ("/../a", "/../a"),
            ("./a", "a"),
            ("a/..", ""),
            (".", ""),
            ("", ""),
            ("//a//b/", "/a/b"),
        ],
    )
    def test_posix(self, raw: str, expected: str) -> None:
        assert Utf8PosixPath(raw).normalize().as_raw() == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("C:\\a\\..\\b", "C:\\b"),
            ("C:/a/b", "C:\\a\\b"),
            ("C:a\\..\\b", "C:b"),
            ("\\\\server\\share\\a\\..\\b", "\\\\server\\share\\b"),
            ("a/./b", "a\\b"),
            ("C:\\..", "C:\\.."),
        ],
    )
    def test_windows(self, raw: str, expected: str) -> None:
        assert Utf8WindowsPath(raw).normalize().as_raw() == expected

    def test_bytes(self) -> None:
        assert PosixPath(b"/a/../b").normalize() == PosixPathBuf(b"/b")
        assert PosixPath(b"/a/../b").normalize().as_raw() == b"/b"

    @pytest.mark.parametrize("raw", POSIX_CORPUS)
    def test_posix_idempotent(self, raw: str) -> None:
        once = Utf8PosixPath(raw).normalize()
        assert once.normalize().as_raw() == once.as_raw()

    @pytest.mark.parametrize("raw", WINDOWS_CORPUS)
    def test_windows_idempotent(self, raw: str) -> None:
        once = Utf8WindowsPath(raw).normalize()
        assert once.normalize().as_raw() == once.as_raw()

    @pytest.mark.parametrize("raw", POSIX_CORPUS)
    def test_no_current_dir_left(self, raw: str) -> None:
        assert "." not in Utf8PosixPath(raw).normalize().parts

    @pytest.mark.parametrize("raw", POSIX_CORPUS)
    def test_absoluteness_preserved(self, raw: str) -> None:
        p = Utf8PosixPath(raw)
        assert p.normalize().is_absolute() == p.is_absolute()

    def test_source_unchanged(self) -> None:
        p = Utf8PosixPath("a/../b")
        p.normalize()
        assert p.as_raw() == "a/../b"


class TestAbsolutize:
    def test_joins_onto_current_dir(self) -> None:
        assert Utf8PosixPath("./a/c/d").absolutize("/x/y").as_raw() == "/x/y/a/c/d"

    def test_resolves_parents(self) -> None:
        assert Utf8PosixPath("../z").absolutize("/x/y").as_raw() == "/x/z"

    def test_absolute_input_skips_provider(self) -> None:
        def provider() -> str:
            raise AssertionError("provider must not be called")

        assert Utf8PosixPath("/a/../b").absolutize(provider).as_raw() == "/b"

    def test_provider_callable(self) -> None:
        assert Utf8PosixPath("a").absolutize(lambda: "/base").as_raw() == "/base/a"

    def test_provider_error_propagates(self) -> None:
        def provider() -> str:
            raise RuntimeError("no cwd")

        with pytest.raises(RuntimeError, match="no cwd"):
            Utf8PosixPath("a").absolutize(provider)

    def test_cwd_as_path(self) -> None:
        assert Utf8PosixPath("a").absolutize(Utf8PosixPath("/base")).as_raw() == "/base/a"

    def test_relative_cwd_rejected(self) -> None:
        with pytest.raises(CurrentDirUnavailable) as exc_info:
            Utf8PosixPath("a").absolutize("rel")
        assert exc_info.value.path == "rel"
        assert isinstance(exc_info.value, OSError)

    def test_cwd_unit_type_must_match(self) -> None:
        with pytest.raises(TypeError):
            PosixPath(b"a").absolutize("/x")

    def test_bytes(self) -> None:
        assert PosixPath(b"a").absolutize(b"/x").as_raw() == b"/x/a"

    def test_windows_rooted_keeps_cwd_drive(self) -> None:
        assert Utf8WindowsPath("\\tmp").absolutize("D:\\work").as_raw() == "D:\\tmp"

    def test_windows_drive_relative_same_drive(self) -> None:
        assert Utf8WindowsPath("C:foo").absolutize("c:\\work").as_raw() == "c:\\work\\foo"

    def test_windows_drive_relative_other_drive(self) -> None:
        assert Utf8WindowsPath("D:foo").absolutize("C:\\work").as_raw() == "D:foo"

    def test_windows_rootless_cwd_rejected(self) -> None:
        with pytest.raises(CurrentDirUnavailable):
            Utf8WindowsPath("a").absolutize("\\work")

    def test_process_working_directory(self, tmp_path: object, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)  # type: ignore[arg-type]
        result = Utf8NativePath("child").absolutize()
        assert result.is_absolute()
        assert result.file_name == "child"
        assert result.parent == Utf8NativePath(os.getcwd()).normalize()


class TestNormalizePrefixed:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("\\\\server\\share:x\\y", "\\\\server\\share:x\\y"),
            ("\\\\.\\C:\\x\\..\\y", "\\\\.\\C:\\y"),
            ("\\\\?\\C:x", "\\\\?\\C:x"),
            ("\\\\?\\C:x\\..\\y", "\\\\?\\C:y"),
            ("\\\\?\\C:\\a\\.\\b", "\\\\?\\C:\\a\\b"),
            ("//?/C:/a/./b", "//?/C:\\a\\b"),
            ("\\\\server\\share", "\\\\server\\share"),
        ],
    )
    def test_windows(self, raw: str, expected: str) -> None:
        assert Utf8WindowsPath(raw).normalize().as_raw() == expected

    def test_share_is_kept(self) -> None:
        normalized = Utf8WindowsPath("\\\\server\\share:x\\y").normalize()
        assert normalized.prefix is not None
        assert normalized.prefix.share == "share:x"
