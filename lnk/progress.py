"""Progress events emitted while linking modules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

INSTALLING = "installing"
INSTALLED = "installed"
LINKED = "linked"
UPDATED = "updated"


@dataclass
class LinkEvent:
    kind: str  # "installing" | "installed" | "linked" | "updated"
    name: str
    version: str

    @property
    def spec(self) -> str:
        return f"{self.name}@{self.version}"


class LinkProgress:
    """Record link events and fan them out to callbacks."""

    def __init__(self) -> None:
        self.events: list[LinkEvent] = []
        self.callbacks: list[Callable[[LinkEvent], None]] = []

    def installing(self, name: str, version: str) -> None:
        self._emit(LinkEvent(INSTALLING, name, version))

    def installed(self, name: str, version: str) -> None:
        self._emit(LinkEvent(INSTALLED, name, version))

    def linked(self, name: str, version: str) -> None:
        self._emit(LinkEvent(LINKED, name, version))

    def updated(self, name: str, version: str) -> None:
        self._emit(LinkEvent(UPDATED, name, version))

    def of_kind(self, kind: str) -> list[LinkEvent]:
        return [e for e in self.events if e.kind == kind]

    def _emit(self, event: LinkEvent) -> None:
        self.events.append(event)
        for cb in self.callbacks:
            try:
                cb(event)
            except Exception:
                logger.debug("Progress callback error for %s", event.spec, exc_info=True)
