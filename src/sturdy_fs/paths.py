"""Path and charset normalization helpers."""

from __future__ import annotations

import codecs
import os
from pathlib import Path
from typing import Any

from .errors import InvalidArgumentError

DEFAULT_CHARSET = "utf-8"


def normalize_path(value: Any) -> Path:
    if value is None:
        raise InvalidArgumentError("path is required")
    if isinstance(value, Path):
        return value
    if isinstance(value, (str, bytes, os.PathLike)):
        return Path(os.fsdecode(os.fspath(value)))
    raise InvalidArgumentError(f"Not a path-like value: {value!r}", {"type": type(value).__name__})


def resolve_charset(value: Any = None) -> str:
    """Return the canonical codec name for *value*; None means UTF-8."""
    if value is None:
        return DEFAULT_CHARSET
    if isinstance(value, codecs.CodecInfo):
        return value.name
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Not a charset: {value!r}", {"type": type(value).__name__})
    try:
        return codecs.lookup(value).name
    except LookupError:
        raise InvalidArgumentError(f"Unknown charset: {value}") from None


def ensure_parent(path: Any) -> Path | None:
    """Create the parent directories of *path* if needed.

    Returns the parent, or None when *path* is a bare filename or a root.
    Safe to race with other creators of the same directories.
    """
    p = normalize_path(path)
    parent = p.parent
    if parent == p or parent == Path("."):
        return None
    parent.mkdir(parents=True, exist_ok=True)
    return parent


def with_extension(path: Any, ext: str) -> Path:
    """Return *path* with its filename extension replaced by *ext*.

    Only the last suffix is replaced and dotfiles count as having none,
    so ``c.tar.gz`` becomes ``c.tar.zip`` and ``.bashrc`` becomes ``.bashrc.bak``.
    """
    p = normalize_path(path)
    if not p.name:
        raise InvalidArgumentError(f"Path has no filename: {p}")
    if not ext.startswith("."):
        ext = "." + ext
    return p.with_name(p.stem + ext)
