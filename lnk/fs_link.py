"""Create directory links: junctions on Windows, symlinks elsewhere."""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

import structlog

from lnk.exceptions import LinkError

log = structlog.get_logger("lnk.fs_link")


async def create_dir_link(link_path: Path, target_path: Path) -> None:
    """Make *link_path* point at the directory *target_path*.

    The parent of *link_path* must already exist.

    Raises:
        LinkError: the link could not be created.
    """
    if sys.platform == "win32":
        await _create_junction(link_path, target_path)
    else:
        try:
            os.symlink(target_path, link_path, target_is_directory=True)
        except OSError as e:
            raise LinkError(f'Failed to link "{link_path}" -> "{target_path}": {e}') from e
    log.debug("fs_link.created", link=str(link_path), target=str(target_path))


async def _create_junction(link_path: Path, target_path: Path) -> None:
    # Junctions need no elevated privileges, unlike Windows symlinks.
    try:
        proc = await asyncio.create_subprocess_exec(
            "cmd",
            "/c",
            "mklink",
            "/J",
            str(link_path),
            str(target_path),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await proc.communicate()
    except OSError as e:
        raise LinkError(f'Failed to run mklink for "{link_path}": {e}') from e

    if proc.returncode != 0:
        raise LinkError(
            f'mklink /J "{link_path}" "{target_path}" failed '
            f"(exit {proc.returncode}): {stderr.decode(errors='replace').strip()}"
        )
