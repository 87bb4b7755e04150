"""Custom exceptions for lnk."""


class LinkerError(Exception):
    """Base exception for all linker errors."""


class ConfigurationError(LinkerError):
    """Raised when npm's global root cannot be resolved or does not exist."""


class NotFoundError(LinkerError):
    """Raised when a manifest, module directory or module version is missing."""


class ManifestError(LinkerError):
    """Raised when package.json exists but is not a JSON object."""


class InstallError(LinkerError):
    """Raised when a global npm install fails."""

    def __init__(self, name: str, version: str, returncode: int | None, stderr: str = ""):
        self.name = name
        self.version = version
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr}" if stderr else ""
        super().__init__(
            f'Failed to install "{name}@{version}" globally (exit {returncode}){detail}'
        )


class LinkError(LinkerError):
    """Raised when the local symlink or junction cannot be created."""
