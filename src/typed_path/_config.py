"""Configuration model: immutable descriptions of named path scopes."""

from __future__ import annotations

import dataclasses

from typed_path._errors import UnknownEncoding
from typed_path._registry import get_encoding, path_class


@dataclasses.dataclass(frozen=True)
class ScopeProfile:
    """Describes a named scope.

    :param encoding: Rule set label (e.g. ``"posix"``, ``"windows"``, ``"native"``).
    :param root: Base path every fragment is resolved under.
    :param normalize: Whether resolved paths are returned normalized.
    """

    encoding: str = "native"
    root: str = ""
    normalize: bool = True


@dataclasses.dataclass(frozen=True)
class ScopeConfig:
    """Top-level configuration container.

    :param scopes: Mapping of scope names to their profiles.
    """

    scopes: dict[str, ScopeProfile] = dataclasses.field(default_factory=dict)

    def validate(self) -> None:
        """Validate every profile's encoding and root.

        :raises ValueError: If a profile names an unknown encoding or its root
            holds characters its encoding disallows.
        """
        for name, profile in self.scopes.items():
            try:
                encoding = get_encoding(profile.encoding)
            except UnknownEncoding as exc:
                raise ValueError(f"Scope '{name}' uses unknown encoding '{profile.encoding}'") from exc
            root = path_class(encoding, text=True)(profile.root)
            if not root.is_valid():
                msg = f"Scope '{name}' has a root that is invalid under {encoding.label} rules: {profile.root!r}"
                raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> ScopeConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :param data: Dict with a ``scopes`` key.
        """
        raw_scopes = data.get("scopes", {})
        if not isinstance(raw_scopes, dict):
            msg = "Expected 'scopes' to be a dict"
            raise TypeError(msg)

        scopes: dict[str, ScopeProfile] = {}
        for name, prof in raw_scopes.items():
            if not isinstance(prof, dict):
                msg = f"Scope profile for '{name}' must be a dict"
                raise TypeError(msg)
            scopes[str(name)] = ScopeProfile(
                encoding=str(prof.get("encoding", "native")),
                root=str(prof.get("root", "")),
                normalize=bool(prof.get("normalize", True)),
            )

        return cls(scopes=scopes)
