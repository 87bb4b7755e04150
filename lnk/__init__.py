"""lnk: link globally installed npm modules into a project's node_modules."""

__version__ = "0.1.0"

from lnk.exceptions import (
    ConfigurationError,
    InstallError,
    LinkError,
    LinkerError,
    ManifestError,
    NotFoundError,
)
from lnk.linker import Linker
from lnk.manifest import Manifest, read_manifest, write_manifest
from lnk.models import LinkOptions, LinkReport, ModuleResult
from lnk.npm import GlobalPackageManager, NpmClient
from lnk.progress import LinkEvent, LinkProgress

__all__ = [
    "ConfigurationError",
    "GlobalPackageManager",
    "InstallError",
    "LinkError",
    "LinkEvent",
    "LinkOptions",
    "LinkProgress",
    "LinkReport",
    "Linker",
    "LinkerError",
    "Manifest",
    "ManifestError",
    "ModuleResult",
    "NotFoundError",
    "NpmClient",
    "read_manifest",
    "write_manifest",
]
