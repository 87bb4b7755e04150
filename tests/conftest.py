"""Shared pytest fixtures for lnk tests — npm is faked, symlinks are real (tmp_path)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from lnk.exceptions import InstallError
from lnk.fs_link import create_dir_link
from lnk.linker import Linker


def write_package(directory: Path, data: dict) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(data))
    return path


def read_package(directory: Path) -> dict:
    return json.loads((directory / "package.json").read_text())


class FakeNpm:
    """Stands in for NpmClient; installs by writing a package.json under the root."""

    def __init__(
        self,
        root: Path,
        calls: list,
        versions: dict[str, str] | None = None,
        fail: set[str] | None = None,
        install_creates: bool = True,
    ) -> None:
        self.root = root
        self.calls = calls
        self.versions = versions or {}
        self.fail = fail or set()
        self.install_creates = install_creates
        self.installs: list[tuple[str, str]] = []

    async def resolve_global_root(self) -> Path:
        self.calls.append(("root",))
        return self.root

    async def install_global(self, name: str, version: str) -> str:
        self.calls.append(("install", name, version))
        self.installs.append((name, version))
        if name in self.fail:
            raise InstallError(name, version, 1, "npm ERR! 404")
        if self.install_creates:
            version = self.versions.get(name, "1.0.0")
            write_package(self.root / name, {"name": name, "version": version})
        return "added 1 package"


class RecordingLinkCreator:
    """Wraps create_dir_link and records every call."""

    def __init__(self, calls: list) -> None:
        self.calls = calls
        self.links: list[tuple[Path, Path]] = []

    async def __call__(self, link_path: Path, target_path: Path) -> None:
        self.calls.append(("link", link_path.name))
        self.links.append((link_path, target_path))
        await create_dir_link(link_path, target_path)


@pytest.fixture
def calls() -> list:
    return []


@pytest.fixture
def global_root(tmp_path: Path) -> Path:
    root = tmp_path / "global" / "node_modules"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    proj = tmp_path / "project"
    proj.mkdir()
    return proj


@pytest.fixture
def npm(global_root: Path, calls: list) -> FakeNpm:
    return FakeNpm(global_root, calls)


@pytest.fixture
def link_creator(calls: list) -> RecordingLinkCreator:
    return RecordingLinkCreator(calls)


@pytest.fixture
def linker(npm: FakeNpm, link_creator: RecordingLinkCreator) -> Linker:
    return Linker(npm, create_link=link_creator)
