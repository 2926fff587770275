"""Parse, normalize and safely compose POSIX and Windows paths on any host."""

from typed_path._component import Component, ComponentKind, Prefix, PrefixKind
from typed_path._compose import check_fragment
from typed_path._config import ScopeConfig, ScopeProfile
from typed_path._encoding import Encoding
from typed_path._errors import (
    CheckedAppendRejected,
    CurrentDirUnavailable,
    EncodingConversionRejected,
    InvalidComponent,
    Rejection,
    StripPrefixError,
    TypedPathError,
    UnknownEncoding,
)
from typed_path._native import (
    NATIVE,
    NativePath,
    NativePathBuf,
    Utf8NativePath,
    Utf8NativePathBuf,
    current_dir,
    current_dir_text,
)
from typed_path._parser import ComponentIterator, Components
from typed_path._path import BasePath, Path, PathBuf
from typed_path._registry import (
    available_encodings,
    get_encoding,
    path_class,
    register_encoding,
    typed_path,
    typed_path_buf,
)
from typed_path._scope import Scope, Scopes
from typed_path.flavors import (
    POSIX,
    WINDOWS,
    PosixPath,
    PosixPathBuf,
    Utf8PosixPath,
    Utf8PosixPathBuf,
    Utf8WindowsPath,
    Utf8WindowsPathBuf,
    WindowsPath,
    WindowsPathBuf,
)

__version__ = "0.1.0"

__all__ = [
    # Rule sets
    "Encoding",
    "POSIX",
    "WINDOWS",
    "NATIVE",
    # Paths
    "BasePath",
    "Path",
    "PathBuf",
    "PosixPath",
    "PosixPathBuf",
    "Utf8PosixPath",
    "Utf8PosixPathBuf",
    "WindowsPath",
    "WindowsPathBuf",
    "Utf8WindowsPath",
    "Utf8WindowsPathBuf",
    "NativePath",
    "NativePathBuf",
    "Utf8NativePath",
    "Utf8NativePathBuf",
    # Components
    "Component",
    "ComponentKind",
    "Components",
    "ComponentIterator",
    "Prefix",
    "PrefixKind",
    # Composition
    "check_fragment",
    # Runtime selection
    "available_encodings",
    "get_encoding",
    "path_class",
    "register_encoding",
    "typed_path",
    "typed_path_buf",
    # Current directory
    "current_dir",
    "current_dir_text",
    # Scopes & config
    "Scope",
    "Scopes",
    "ScopeConfig",
    "ScopeProfile",
    # Errors
    "TypedPathError",
    "InvalidComponent",
    "CheckedAppendRejected",
    "Rejection",
    "EncodingConversionRejected",
    "CurrentDirUnavailable",
    "StripPrefixError",
    "UnknownEncoding",
    # Version
    "__version__",
]
