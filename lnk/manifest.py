"""Read and write package.json manifests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from lnk.exceptions import ManifestError, NotFoundError
from lnk.models import DEPENDENCIES, DEV_DEPENDENCIES

log = structlog.get_logger("lnk.manifest")

MANIFEST_NAME = "package.json"


@dataclass
class Manifest:
    """A parsed package.json.

    ``data`` is the raw JSON object. Keys this tool does not know about are
    kept as-is and written back in their original order.
    """

    path: Path
    data: dict[str, Any]

    @property
    def version(self) -> str | None:
        version = self.data.get("version")
        return version or None

    @property
    def dependencies(self) -> dict[str, str] | None:
        return self.data.get(DEPENDENCIES)

    @property
    def dev_dependencies(self) -> dict[str, str] | None:
        return self.data.get(DEV_DEPENDENCIES)

    def section(self, key: str) -> dict[str, str]:
        """Return the dependency map under *key*, creating it if missing."""
        deps = self.data.get(key)
        if deps is None:
            deps = {}
            self.data[key] = deps
        return deps


def read_manifest(path: Path | str) -> Manifest:
    """Load the manifest at *path*.

    Raises:
        NotFoundError: the file does not exist.
        ManifestError: the file is not valid JSON or not a JSON object.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f'"{path}" does not exist.')

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f'"{path}" is not valid JSON: {e}') from e

    if not isinstance(data, dict):
        raise ManifestError(f'"{path}" must contain a JSON object.')

    log.debug("manifest.loaded", path=str(path))
    return Manifest(path=path, data=data)


def dumps_manifest(manifest: Manifest) -> str:
    """Serialize *manifest* with one tab per indent level."""
    return json.dumps(manifest.data, indent="\t", ensure_ascii=False)


def write_manifest(manifest: Manifest) -> None:
    """Overwrite the manifest file in place.

    Raises:
        ManifestError: the file could not be written.
    """
    try:
        manifest.path.write_text(dumps_manifest(manifest), encoding="utf-8")
    except OSError as e:
        raise ManifestError(f'Failed to write "{manifest.path}": {e}') from e
    log.debug("manifest.written", path=str(manifest.path))


def read_module_version(module_dir: Path, name: str) -> str:
    """Return the ``version`` declared by the module installed at *module_dir*."""
    manifest = read_manifest(module_dir / MANIFEST_NAME)
    if not manifest.version:
        raise NotFoundError(
            f'Module "{name}" declares no version in {module_dir / MANIFEST_NAME}.'
        )
    return manifest.version
