"""Scope: a base path that untrusted fragments are resolved under."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from typed_path._config import ScopeConfig
from typed_path._errors import CheckedAppendRejected, Rejection
from typed_path._registry import get_encoding, path_class

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typed_path._encoding import Encoding
    from typed_path._path import BasePath, Path, PathBuf
    from typed_path._registry import EncodingLike

log = logging.getLogger(__name__)


class Scope:
    """A root path under a fixed rule set.

    Every fragment handed to :meth:`resolve` goes through a checked join, so
    results never leave the root.

    :param root: Base path (text).
    :param encoding: Rule set label or :class:`Encoding`.
    :param normalize: Return resolved paths normalized.
    """

    def __init__(self, root: str | BasePath = "", encoding: EncodingLike = "native", *, normalize: bool = True) -> None:
        self._encoding = get_encoding(encoding)
        cls = path_class(self._encoding, text=True)
        self._root: Path = cls(root).normalize().as_path()
        self._normalize = normalize

    def __repr__(self) -> str:
        return f"Scope(root={str(self._root)!r}, encoding={self._encoding.label!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Scope):
            return (self._root, self._encoding, self._normalize) == (other._root, other._encoding, other._normalize)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._root, self._encoding, self._normalize))

    @property
    def root(self) -> Path:
        return self._root

    @property
    def encoding(self) -> Encoding:
        return self._encoding

    def resolve(self, fragment: str | BasePath) -> PathBuf:
        """Join ``fragment`` onto the root, refusing anything that leaves it.

        :raises CheckedAppendRejected: If the fragment is absolute, prefixed,
            invalid, or escapes the root.
        """
        try:
            joined = self._root.join_checked(fragment)
            normalized = joined.normalize()
            # join_checked lets a fragment cancel part of the base; a scope never leaves its root
            if not normalized.starts_with(self._root):
                raise CheckedAppendRejected(
                    "Fragment escapes the scope root",
                    path=str(fragment),
                    encoding=self._encoding.label,
                    reason=Rejection.PATH_TRAVERSAL,
                )
        except CheckedAppendRejected as exc:
            log.debug("rejected fragment %r under %r: %s", fragment, str(self._root), exc.reason.value)
            raise
        return normalized if self._normalize else joined

    def resolve_many(self, fragments: Iterable[str | BasePath]) -> list[PathBuf]:
        """Resolve every fragment; the first rejection aborts the batch."""
        return [self.resolve(f) for f in fragments]

    def contains(self, path: str | BasePath) -> bool:
        """Whether ``path``, once normalized, lies at or under the root."""
        candidate = path_class(self._encoding, text=True)(path).normalize()
        return candidate.starts_with(self._root)

    def to_key(self, path: str | BasePath) -> str:
        """Express ``path`` relative to the root.

        :raises StripPrefixError: If ``path`` is not under the root.
        """
        candidate = path_class(self._encoding, text=True)(path).normalize()
        return str(candidate.strip_prefix(self._root))


class Scopes:
    """Builds :class:`Scope` objects from a :class:`ScopeConfig`.

    :param config: Optional configuration. Validates immediately.
    :raises ValueError: If config is invalid.
    """

    def __init__(self, config: ScopeConfig | None = None) -> None:
        self._config = config or ScopeConfig()
        self._config.validate()
        self._scopes: dict[str, Scope] = {}

    def __repr__(self) -> str:
        return f"Scopes(scopes={sorted(self._config.scopes)!r})"

    def names(self) -> list[str]:
        return sorted(self._config.scopes)

    def get_scope(self, name: str) -> Scope:
        """Get a scope by its profile name, building it on first use.

        :raises KeyError: If no profile with this name exists.
        """
        if name not in self._config.scopes:
            raise KeyError(f"Unknown scope '{name}'. Available scopes: {self.names()}")
        if name not in self._scopes:
            profile = self._config.scopes[name]
            self._scopes[name] = Scope(profile.root, profile.encoding, normalize=profile.normalize)
        return self._scopes[name]
