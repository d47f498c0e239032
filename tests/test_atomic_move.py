"""Tests for sturdy_fs.file_io.atomic_move."""

from __future__ import annotations

import errno
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from sturdy_fs.file_io import atomic_move, read_text, write_text
from sturdy_fs.permissions import posix_permissions

_real_replace = os.replace


def _cross_device_once():
    """os.replace stand-in whose first call fails with EXDEV."""
    calls: list[tuple[str, str]] = []

    def fake(src, dst):
        calls.append((str(src), str(dst)))
        if len(calls) == 1:
            raise OSError(errno.EXDEV, "Invalid cross-device link")
        return _real_replace(src, dst)

    return fake, calls


class TestRenamePath:
    def test_happy_path(self, tmp_path: Path):
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        write_text(src, "important data")

        assert atomic_move(src, dst) == dst

        assert dst.exists()
        assert not src.exists()
        assert read_text(dst) == "important data"

    def test_overwrites_existing_destination(self, tmp_path: Path):
        src = tmp_path / "new-version.txt"
        dst = tmp_path / "config.json"
        write_text(dst, '{"version": 1}')
        write_text(src, '{"version": 2}')

        atomic_move(src, dst)

        assert read_text(dst) == '{"version": 2}'
        assert not src.exists()

    def test_creates_missing_parents(self, tmp_path: Path):
        src = tmp_path / "deep-src.txt"
        dst = tmp_path / "a" / "b" / "c" / "moved.txt"
        write_text(src, "deep data")

        atomic_move(str(src), str(dst))

        assert read_text(dst) == "deep data"

    def test_missing_source(self, tmp_path: Path):
        src = tmp_path / "ghost.txt"
        dst = tmp_path / "wont-exist.txt"
        with pytest.raises(FileNotFoundError):
            atomic_move(src, dst)
        assert not dst.exists()

    def test_move_onto_itself(self, tmp_path: Path):
        src = tmp_path / "same.txt"
        write_text(src, "content")
        atomic_move(src, src)
        assert read_text(src) == "content"

    def test_other_errors_skip_fallback(self, tmp_path: Path):
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        write_text(src, "data")
        with patch("sturdy_fs.file_io.os.replace", side_effect=PermissionError(errno.EACCES, "denied")), patch(
            "sturdy_fs.file_io._copy_replace"
        ) as copy_replace:
            with pytest.raises(PermissionError):
                atomic_move(src, dst)
        copy_replace.assert_not_called()
        assert src.exists()
        assert not dst.exists()


class TestCrossFilesystemFallback:
    def test_copies_renames_and_removes_source(self, tmp_path: Path):
        src = tmp_path / "src.txt"
        dst = tmp_path / "out" / "dst.txt"
        write_text(src, "payload")
        write_text(dst, "stale")
        fake, calls = _cross_device_once()

        with patch("sturdy_fs.file_io.os.replace", side_effect=fake):
            atomic_move(src, dst)

        assert read_text(dst) == "payload"
        assert not src.exists()
        assert list(dst.parent.iterdir()) == [dst]
        # second rename moves a temp file from the destination directory
        tmp_src, final_dst = calls[1]
        assert Path(tmp_src).parent == dst.parent
        assert Path(tmp_src).name.startswith("dst.txt.")
        assert final_dst == str(dst)

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions required")
    def test_preserves_permission_bits(self, tmp_path: Path):
        src = tmp_path / "src.sh"
        dst = tmp_path / "dst.sh"
        write_text(src, "#!/bin/sh\n")
        os.chmod(src, 0o750)
        fake, _ = _cross_device_once()

        with patch("sturdy_fs.file_io.os.replace", side_effect=fake):
            atomic_move(src, dst)

        assert posix_permissions(dst) == "rwxr-x---"

    def test_copy_failure_leaves_source_and_destination(self, tmp_path: Path):
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        write_text(src, "new")
        write_text(dst, "old")
        fake, _ = _cross_device_once()

        with patch("sturdy_fs.file_io.os.replace", side_effect=fake), patch(
            "sturdy_fs.file_io.shutil.copyfileobj", side_effect=OSError(errno.ENOSPC, "No space left on device")
        ):
            with pytest.raises(OSError) as excinfo:
                atomic_move(src, dst)

        assert excinfo.value.errno == errno.ENOSPC
        assert read_text(src) == "new"
        assert read_text(dst) == "old"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["dst.txt", "src.txt"]

    def test_fsync_can_be_disabled(self, tmp_path: Path):
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        write_text(src, "payload")
        fake, _ = _cross_device_once()

        with patch("sturdy_fs.file_io.os.replace", side_effect=fake), patch("sturdy_fs.file_io.os.fsync") as fsync:
            atomic_move(src, dst, fsync=False)

        fsync.assert_not_called()
        assert read_text(dst) == "payload"
        assert not src.exists()

    def test_missing_source_after_exdev(self, tmp_path: Path):
        src = tmp_path / "ghost.txt"
        dst = tmp_path / "dst.txt"
        fake, _ = _cross_device_once()

        with patch("sturdy_fs.file_io.os.replace", side_effect=fake):
            with pytest.raises(FileNotFoundError):
                atomic_move(src, dst)

        assert list(tmp_path.iterdir()) == []
