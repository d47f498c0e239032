"""POSIX permission helpers.

Only meaningful on POSIX filesystems; elsewhere the bits reported by the OS
do not reflect real access control.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Any

from .errors import PermissionMismatchError
from .paths import normalize_path

OWNER_READ_WRITE = "rw-------"
OWNER_READ_ONLY = "r--------"

_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def permissions_to_str(mode: int) -> str:
    return "".join(ch if mode & bit else "-" for bit, ch in _BITS)


def posix_permissions(path: Any) -> str:
    """Return the permission bits of *path* in ``rwxrwxrwx`` form."""
    return permissions_to_str(normalize_path(path).stat().st_mode)


def set_owner_read_write(path: Any) -> None:
    os.chmod(normalize_path(path), stat.S_IRUSR | stat.S_IWUSR)


def set_owner_read_only(path: Any) -> None:
    os.chmod(normalize_path(path), stat.S_IRUSR)


def _assert_permissions(path: Any, expected: str) -> Path:
    p = normalize_path(path)
    actual = posix_permissions(p)
    if actual != expected:
        raise PermissionMismatchError(p, expected, actual)
    return p


def assert_owner_read_write(path: Any) -> Path:
    """Raise PermissionMismatchError unless *path* is exactly rw-------."""
    return _assert_permissions(path, OWNER_READ_WRITE)


def assert_owner_read_only(path: Any) -> Path:
    """Raise PermissionMismatchError unless *path* is exactly r--------."""
    return _assert_permissions(path, OWNER_READ_ONLY)
