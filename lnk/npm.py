"""npm subprocess helpers: global root lookup and global installs."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from lnk.exceptions import ConfigurationError, InstallError

log = structlog.get_logger("lnk.npm")

# Keep error messages readable when npm dumps a long log.
_STDERR_TAIL = 1000


@runtime_checkable
class GlobalPackageManager(Protocol):
    """Interface the linker needs from the host package manager."""

    async def resolve_global_root(self) -> Path: ...

    async def install_global(self, name: str, version: str) -> str: ...


class NpmClient:
    """Run npm in a subprocess."""

    def __init__(self, npm_command: str = "npm") -> None:
        self.npm_command = npm_command

    async def resolve_global_root(self) -> Path:
        """Return the directory npm installs global modules into (``npm root -g``)."""
        try:
            returncode, stdout, stderr = await self._run("root", "-g")
        except FileNotFoundError as e:
            raise ConfigurationError(f'"{self.npm_command}" was not found on PATH.') from e

        if returncode != 0:
            raise ConfigurationError(
                f"npm root -g failed (exit {returncode}): {stderr[-_STDERR_TAIL:]}"
            )

        root = stdout.strip()
        if not root:
            raise ConfigurationError("npm root -g returned an empty path.")
        log.debug("npm.global_root", root=root)
        return Path(root)

    async def install_global(self, name: str, version: str) -> str:
        """Install ``name@version`` globally and return npm's trimmed output."""
        log.info("npm.install_started", module=name, version=version)
        try:
            returncode, stdout, stderr = await self._run("install", "-g", f"{name}@{version}")
        except FileNotFoundError as e:
            raise InstallError(name, version, None, f'"{self.npm_command}" was not found') from e

        if returncode != 0:
            log.warning("npm.install_failed", module=name, version=version, exit=returncode)
            raise InstallError(name, version, returncode, stderr[-_STDERR_TAIL:])

        log.info("npm.install_finished", module=name, version=version)
        return stdout.strip()

    async def _run(self, *args: str) -> tuple[int, str, str]:
        proc = await asyncio.create_subprocess_exec(
            self.npm_command,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        return (
            proc.returncode,
            stdout.decode(errors="replace"),
            stderr.decode(errors="replace").strip(),
        )
