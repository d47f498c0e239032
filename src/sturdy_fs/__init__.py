"""Safe whole-file read/write primitives with atomic write and move."""

from __future__ import annotations

from .errors import (
    InvalidArgumentError,
    InvalidConfigurationError,
    PermissionMismatchError,
    SturdyFSError,
)
from .file_io import (
    atomic_move,
    atomic_write,
    read_bytes,
    read_lines,
    read_text,
    write_bytes,
    write_text,
)
from .paths import ensure_parent, normalize_path, resolve_charset, with_extension
from .permissions import (
    OWNER_READ_ONLY,
    OWNER_READ_WRITE,
    assert_owner_read_only,
    assert_owner_read_write,
    posix_permissions,
    set_owner_read_only,
    set_owner_read_write,
)
from .structured import read_data, read_json, write_data, write_json

__version__ = "0.1.0"

__all__ = [
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "OWNER_READ_ONLY",
    "OWNER_READ_WRITE",
    "PermissionMismatchError",
    "SturdyFSError",
    "assert_owner_read_only",
    "assert_owner_read_write",
    "atomic_move",
    "atomic_write",
    "ensure_parent",
    "normalize_path",
    "posix_permissions",
    "read_bytes",
    "read_data",
    "read_json",
    "read_lines",
    "read_text",
    "resolve_charset",
    "set_owner_read_only",
    "set_owner_read_write",
    "with_extension",
    "write_bytes",
    "write_data",
    "write_json",
    "write_text",
]
