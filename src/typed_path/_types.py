"""Type aliases used throughout typed_path."""

from __future__ import annotations

from collections.abc import Callable
from typing import Union

RawPath = Union[str, bytes]  # noqa: UP007
CurrentDirProvider = Callable[[], RawPath]
