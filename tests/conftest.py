"""Shared test fixtures."""

from __future__ import annotations

import pytest

from typed_path import _registry
from typed_path._native import NATIVE
from typed_path.flavors import POSIX, Utf8PosixPath, Utf8WindowsPath


@pytest.fixture
def isolated_registry(monkeypatch: pytest.MonkeyPatch) -> dict[str, object]:
    """Run a test against a fresh encoding registry."""
    fresh: dict[str, object] = {}
    monkeypatch.setattr(_registry, "_ENCODINGS", fresh)
    return fresh


@pytest.fixture
def foreign_path_class() -> type:
    """Text view class for the rule set this host does not use."""
    return Utf8WindowsPath if NATIVE == POSIX else Utf8PosixPath
