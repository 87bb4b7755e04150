"""Data models for link options and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

WILDCARD = "*"
LATEST = "latest"

DEPENDENCIES = "dependencies"
DEV_DEPENDENCIES = "devDependencies"


@dataclass
class LinkOptions:
    """Flags controlling one link invocation."""

    target_dev: bool = False  # -D
    force_latest: bool = False  # -L
    refresh_version_on_existing_link: bool = True


@dataclass
class ModuleResult:
    """Outcome of linking a single module."""

    name: str
    status: str  # "linked" | "updated" | "unchanged" | "skipped"
    version: str | None = None
    section: str | None = None  # "dependencies" | "devDependencies"
    installed: bool = False
    previous_range: str | None = None


@dataclass
class LinkReport:
    """Result of a full link invocation."""

    project_dir: Path
    global_root: Path
    results: list[ModuleResult] = field(default_factory=list)

    @property
    def linked(self) -> list[ModuleResult]:
        return [r for r in self.results if r.status == "linked"]

    @property
    def updated(self) -> list[ModuleResult]:
        return [r for r in self.results if r.status == "updated"]

    @property
    def changed(self) -> bool:
        return any(r.status in ("linked", "updated") for r in self.results)
