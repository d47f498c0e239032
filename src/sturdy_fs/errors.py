"""Error types raised by sturdy_fs.

Missing files and storage failures surface as the built-in FileNotFoundError
and OSError; only conditions the OS cannot express get their own class.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional


class SturdyFSError(Exception):
    """Base error with optional context rendered into the message."""

    def __init__(self, msg: str, ctx: Optional[Dict[str, Any]] = None):
        super().__init__(msg)
        self.msg = msg
        self.ctx = ctx or {}

    def __str__(self) -> str:
        if self.ctx:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.ctx.items())
            return f"{self.msg} [{ctx_str}]"
        return self.msg


class InvalidArgumentError(SturdyFSError, ValueError):
    """A required argument is missing or unusable. Raised before any I/O."""


class InvalidConfigurationError(SturdyFSError, ValueError):
    """Mutually exclusive options were requested together. Raised before any I/O."""


class PermissionMismatchError(SturdyFSError):
    """File permission bits differ from the asserted symbolic form."""

    def __init__(self, path: Path, expected: str, actual: str):
        super().__init__(
            f"Invalid file permissions for {path}",
            {"path": str(path), "expected": expected, "actual": actual},
        )
        self.path = path
        self.expected = expected
        self.actual = actual
