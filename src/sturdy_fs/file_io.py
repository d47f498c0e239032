"""Whole-file I/O with atomic write and atomic move.

Atomic operations stage data in a temp file next to the target and
``os.replace`` it into place, so readers see either the old or the new
content. A temp file is always renamed or removed before the call returns.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from .errors import InvalidArgumentError, InvalidConfigurationError
from .paths import ensure_parent, normalize_path, resolve_charset

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"

_BytesLike = (bytes, bytearray, memoryview)


def _require_bytes(data: Any) -> None:
    if data is None:
        raise InvalidArgumentError("data is required")
    if not isinstance(data, _BytesLike):
        raise InvalidArgumentError(f"Expected bytes, got {type(data).__name__}")


def _check_modes(append: bool, atomic: bool) -> None:
    if append and atomic:
        raise InvalidConfigurationError("append and atomic are mutually exclusive")


def _create_temp(target: Path) -> tuple[int, Path]:
    fd, name = tempfile.mkstemp(dir=target.parent, prefix=f"{target.name}.", suffix=TEMP_SUFFIX)
    logger.debug("Created temp file %s for %s", name, target)
    return fd, Path(name)


def _discard_temp(tmp: Path) -> None:
    try:
        tmp.unlink()
    except FileNotFoundError:
        pass
    except OSError:
        logger.debug("Failed to remove temp file %s", tmp, exc_info=True)


def atomic_write(path: Any, data: Any, *, mode: int | None = None, fsync: bool = True) -> Path:
    """Write *data* to *path* atomically.

    Temp files are created with 0600 permissions, which the target inherits
    unless *mode* is given. With *fsync* the temp file is flushed to disk
    before the rename. On failure the temp file is removed and the original
    error propagates.
    """
    target = normalize_path(path)
    _require_bytes(data)
    ensure_parent(target)

    fd, tmp = _create_temp(target)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            if fsync:
                os.fsync(fh.fileno())
        if mode is not None:
            os.chmod(tmp, mode)
        os.replace(tmp, target)
    except BaseException:
        _discard_temp(tmp)
        raise
    logger.debug("Atomically replaced %s", target)
    return target


def write_bytes(
    path: Any,
    data: Any,
    *,
    append: bool = False,
    atomic: bool = False,
    mode: int | None = None,
    fsync: bool = True,
) -> Path:
    """Write *data* to *path*, creating parent directories.

    Overwrites by default; *append* and *atomic* select the other modes and
    cannot be combined. *mode* and *fsync* belong to atomic writes, and
    passing *mode* without *atomic* is rejected.
    """
    _check_modes(append, atomic)
    if mode is not None and not atomic:
        raise InvalidConfigurationError("mode is only supported for atomic writes", {"mode": oct(mode)})
    target = normalize_path(path)
    _require_bytes(data)

    if atomic:
        return atomic_write(target, data, mode=mode, fsync=fsync)

    ensure_parent(target)
    with open(target, "ab" if append else "wb") as fh:
        fh.write(data)
    return target


def write_text(
    path: Any,
    text: Any,
    *,
    charset: Any = None,
    append: bool = False,
    atomic: bool = False,
) -> Path:
    """Encode *text* with *charset* (UTF-8 by default) and write it."""
    _check_modes(append, atomic)
    if not isinstance(text, str):
        raise InvalidArgumentError(f"Expected str, got {type(text).__name__}")
    encoding = resolve_charset(charset)
    return write_bytes(path, text.encode(encoding), append=append, atomic=atomic)


def read_bytes(path: Any) -> bytes:
    return normalize_path(path).read_bytes()


def read_text(path: Any, charset: Any = None) -> str:
    encoding = resolve_charset(charset)
    return read_bytes(path).decode(encoding)


def read_lines(path: Any, charset: Any = None) -> list[str]:
    """Read *path* as a list of lines without their terminators."""
    encoding = resolve_charset(charset)
    with open(normalize_path(path), "r", encoding=encoding, newline=None) as fh:
        return [line.rstrip("\n") for line in fh]


def _copy_replace(source: Path, destination: Path, fsync: bool) -> None:
    fd, tmp = _create_temp(destination)
    try:
        with os.fdopen(fd, "wb") as out, open(source, "rb") as inp:
            shutil.copyfileobj(inp, out)
            out.flush()
            if fsync:
                os.fsync(out.fileno())
        shutil.copymode(source, tmp)
        os.replace(tmp, destination)
    except BaseException:
        _discard_temp(tmp)
        raise


def atomic_move(source: Any, destination: Any, *, fsync: bool = True) -> Path:
    """Move *source* onto *destination*, replacing it atomically.

    A plain rename is tried first. When it fails with EXDEV the content is
    copied to a temp file in the destination directory, renamed into place,
    and only then is *source* removed. A crash between those two last steps
    leaves both files present.
    """
    src = normalize_path(source)
    dst = normalize_path(destination)
    ensure_parent(dst)

    try:
        os.replace(src, dst)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        logger.debug("Rename %s -> %s crosses filesystems; copying instead", src, dst)
        _copy_replace(src, dst, fsync)
        src.unlink()
    return dst
