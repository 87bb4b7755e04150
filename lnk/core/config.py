"""Runtime settings read from environment variables."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def _default_npm() -> str:
    # npm ships as a .cmd shim on Windows, which create_subprocess_exec won't resolve.
    return "npm.cmd" if sys.platform == "win32" else "npm"


def _env_bool(key: str, default: bool) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Settings for one lnk process.

    Reads from environment variables:
        LNK_NPM              — npm executable (default: npm, npm.cmd on Windows)
        LNK_LOG_LEVEL        — log level (default: WARNING)
        LNK_LOG_FORMAT       — console | json (default: console)
        LNK_REFRESH_EXISTING — refresh recorded versions of already-linked
                               modules (default: 1)
    """

    npm_command: str
    log_level: str = "WARNING"
    log_format: str = "console"
    refresh_existing: bool = True

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            npm_command=os.environ.get("LNK_NPM") or _default_npm(),
            log_level=os.environ.get("LNK_LOG_LEVEL", "WARNING").upper(),
            log_format=os.environ.get("LNK_LOG_FORMAT", "console").lower(),
            refresh_existing=_env_bool("LNK_REFRESH_EXISTING", True),
        )
