"""Tests for create_dir_link — symlinks for real, junctions via mocked mklink."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from lnk.exceptions import LinkError
from lnk.fs_link import create_dir_link


def _posix_sys() -> MagicMock:
    return MagicMock(platform="linux")


def _windows_sys() -> MagicMock:
    return MagicMock(platform="win32")


class TestSymlink:
    @pytest.mark.asyncio
    async def test_creates_directory_symlink(self, tmp_path: Path):
        target = tmp_path / "global" / "foo"
        target.mkdir(parents=True)
        (target / "index.js").write_text("module.exports = 1")
        link = tmp_path / "node_modules" / "foo"
        link.parent.mkdir()

        with patch("lnk.fs_link.sys", _posix_sys()):
            await create_dir_link(link, target)

        assert link.is_symlink()
        assert Path(os.readlink(link)) == target
        assert (link / "index.js").read_text() == "module.exports = 1"

    @pytest.mark.asyncio
    async def test_existing_entry_raises_link_error(self, tmp_path: Path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        link.write_text("in the way")

        with patch("lnk.fs_link.sys", _posix_sys()):
            with pytest.raises(LinkError, match="Failed to link"):
                await create_dir_link(link, target)

    @pytest.mark.asyncio
    async def test_missing_parent_raises_link_error(self, tmp_path: Path):
        target = tmp_path / "target"
        target.mkdir()

        with patch("lnk.fs_link.sys", _posix_sys()):
            with pytest.raises(LinkError):
                await create_dir_link(tmp_path / "missing" / "link", target)


class TestJunction:
    @pytest.mark.asyncio
    async def test_runs_mklink(self, tmp_path: Path):
        proc = MagicMock(returncode=0)
        proc.communicate = AsyncMock(return_value=(b"Junction created", b""))
        mock_exec = AsyncMock(return_value=proc)

        link, target = tmp_path / "link", tmp_path / "target"
        with (
            patch("lnk.fs_link.sys", _windows_sys()),
            patch("lnk.fs_link.asyncio.create_subprocess_exec", mock_exec),
        ):
            await create_dir_link(link, target)

        assert mock_exec.call_args.args == ("cmd", "/c", "mklink", "/J", str(link), str(target))

    @pytest.mark.asyncio
    async def test_mklink_failure(self, tmp_path: Path):
        proc = MagicMock(returncode=1)
        proc.communicate = AsyncMock(return_value=(b"", b"Cannot create a file"))

        with (
            patch("lnk.fs_link.sys", _windows_sys()),
            patch("lnk.fs_link.asyncio.create_subprocess_exec", AsyncMock(return_value=proc)),
        ):
            with pytest.raises(LinkError, match="Cannot create a file"):
                await create_dir_link(tmp_path / "link", tmp_path / "target")

    @pytest.mark.asyncio
    async def test_cmd_unavailable(self, tmp_path: Path):
        mock_exec = AsyncMock(side_effect=FileNotFoundError("cmd"))
        with (
            patch("lnk.fs_link.sys", _windows_sys()),
            patch("lnk.fs_link.asyncio.create_subprocess_exec", mock_exec),
        ):
            with pytest.raises(LinkError, match="mklink"):
                await create_dir_link(tmp_path / "link", tmp_path / "target")
