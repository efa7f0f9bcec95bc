"""
Recording observer — test double that keeps every event it receives.

Used by tests and embedding code to assert on event order without
rendering anything.
"""

from __future__ import annotations

from ferry.adapters.base import InstallObserver
from ferry.core.models.events import InstallEvent, UpdateEvent


class RecordingObserver(InstallObserver):
    """Collects install and update events in arrival order."""

    name = "recording"

    def __init__(self) -> None:
        self._install_events: list[InstallEvent] = []
        self._update_events: list[UpdateEvent] = []

    @property
    def install_events(self) -> list[InstallEvent]:
        """All install events this observer has received."""
        return self._install_events

    @property
    def update_events(self) -> list[UpdateEvent]:
        """All update events this observer has received."""
        return self._update_events

    @property
    def install_kinds(self) -> list[str]:
        return [e.kind for e in self._install_events]

    @property
    def update_kinds(self) -> list[str]:
        return [e.kind for e in self._update_events]

    def on_install_event(self, event: InstallEvent) -> None:
        self._install_events.append(event)

    def on_update_event(self, event: UpdateEvent) -> None:
        self._update_events.append(event)

    def reset(self) -> None:
        """Clear both event logs."""
        self._install_events.clear()
        self._update_events.clear()
