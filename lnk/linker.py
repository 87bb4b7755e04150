"""Linker — link global npm modules into a project's node_modules."""

from __future__ import annotations

from pathlib import Path
from typing import Awaitable, Callable

import structlog

from lnk.exceptions import ConfigurationError, LinkError, NotFoundError
from lnk.fs_link import create_dir_link
from lnk.manifest import (
    MANIFEST_NAME,
    Manifest,
    read_manifest,
    read_module_version,
    write_manifest,
)
from lnk.models import (
    DEPENDENCIES,
    DEV_DEPENDENCIES,
    LATEST,
    WILDCARD,
    LinkOptions,
    LinkReport,
    ModuleResult,
)
from lnk.npm import GlobalPackageManager
from lnk.progress import LinkProgress

log = structlog.get_logger("lnk.linker")

LinkCreator = Callable[[Path, Path], Awaitable[None]]


class Linker:
    """Ensure project dependencies point at globally installed npm modules.

    For each target module:
    1. If ``node_modules/<name>`` already exists, keep it and (optionally)
       refresh the recorded version from the local copy.
    2. Otherwise install the module globally if npm's global root lacks it,
       then link ``node_modules/<name>`` to the global copy.
    3. Record ``^<version>`` under ``devDependencies`` or ``dependencies``.

    The manifest is read once at the start and written once at the end.
    Any error aborts the whole run before the manifest is written.
    """

    def __init__(
        self,
        npm: GlobalPackageManager,
        create_link: LinkCreator = create_dir_link,
        progress: LinkProgress | None = None,
    ) -> None:
        self._npm = npm
        self._create_link = create_link
        self.progress = progress or LinkProgress()

    async def link(
        self,
        module: str,
        project_dir: Path | str,
        options: LinkOptions | None = None,
    ) -> LinkReport:
        """Link *module* (or every manifest dependency for ``*``) into *project_dir*.

        Raises:
            ValueError: *module* is empty.
            ConfigurationError: npm's global root is missing.
            NotFoundError: package.json, a module directory or its version is missing.
            InstallError: a global install failed.
            LinkError: the local link or its parent directory could not be created.
            ManifestError: package.json is malformed or could not be written.
        """
        if not module:
            raise ValueError("Must provide a module name.")
        options = options or LinkOptions()
        project_dir = Path(project_dir)

        global_root = await self._npm.resolve_global_root()
        if not global_root.exists():
            raise ConfigurationError(f'"{global_root}" does not exist.')

        manifest = read_manifest(project_dir / MANIFEST_NAME)
        report = LinkReport(project_dir=project_dir, global_root=global_root)

        for name, requested in self._targets(module, manifest, options):
            result = await self._link_module(
                project_dir, global_root, name, requested, manifest, options
            )
            report.results.append(result)

        write_manifest(manifest)
        log.info(
            "linker.done",
            project=str(project_dir),
            linked=len(report.linked),
            updated=len(report.updated),
            changed=report.changed,
        )
        return report

    @staticmethod
    def _targets(module: str, manifest: Manifest, options: LinkOptions):
        """Yield ``(name, requested_version)`` pairs in manifest order.

        Each section's keys are read when its loop starts, so edits made while
        processing ``dependencies`` are visible to the ``devDependencies`` pass.
        """
        if module != WILDCARD:
            yield module, LATEST
            return

        sections = [DEPENDENCIES]
        if options.target_dev:
            sections.append(DEV_DEPENDENCIES)

        for key in sections:
            deps = manifest.data.get(key)
            if not deps:
                continue
            for name, version in list(deps.items()):
                yield name, LATEST if options.force_latest else version

    async def _link_module(
        self,
        project_dir: Path,
        global_root: Path,
        name: str,
        requested: str,
        manifest: Manifest,
        options: LinkOptions,
    ) -> ModuleResult:
        local_path = project_dir / "node_modules" / name
        linked = False
        installed = False

        if local_path.exists():
            if not options.refresh_version_on_existing_link:
                log.debug("linker.skip_existing", module=name, path=str(local_path))
                return ModuleResult(name=name, status="skipped")
            version = read_module_version(local_path, name)
        else:
            global_path = global_root / name

            if not global_path.exists():
                self.progress.installing(name, requested)
                await self._npm.install_global(name, requested)
                self.progress.installed(name, requested)
                installed = True

            if not global_path.exists():
                raise NotFoundError(f'"{global_path}" does not exist.')

            version = read_module_version(global_path, name)

            try:
                local_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LinkError(f'Failed to create "{local_path.parent}": {e}') from e
            await self._create_link(local_path, global_path)
            linked = True
            log.info("linker.linked", module=name, version=version, target=str(global_path))
            self.progress.linked(name, version)

        new_range = f"^{version}"
        section, previous = self._classify(name, manifest, options)
        manifest.section(section)[name] = new_range

        if linked:
            status = "linked"
        elif new_range != previous:
            status = "updated"
            log.info("linker.updated", module=name, previous=previous, range=new_range)
            self.progress.updated(name, version)
        else:
            status = "unchanged"

        return ModuleResult(
            name=name,
            status=status,
            version=version,
            section=section,
            installed=installed,
            previous_range=previous,
        )

    @staticmethod
    def _classify(name: str, manifest: Manifest, options: LinkOptions) -> tuple[str, str | None]:
        """Pick the section to record *name* in, plus its current range if any.

        An existing ``devDependencies`` entry wins over ``dependencies`` even
        without ``-D``. New entries follow ``options.target_dev``.
        """
        dev = manifest.dev_dependencies
        if dev and name in dev:
            return DEV_DEPENDENCIES, dev[name]

        deps = manifest.dependencies
        if deps and name in deps:
            return DEPENDENCIES, deps[name]

        return (DEV_DEPENDENCIES if options.target_dev else DEPENDENCIES), None
