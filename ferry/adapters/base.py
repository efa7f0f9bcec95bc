"""
Observer base — the protocol contract between engine and renderers.

The core pushes pipeline events to an observer and never renders
anything itself.  Observers are observational only: they must not
mutate engine state or raise to steer the pipeline.

To create a new observer:
    1. Subclass InstallObserver
    2. Override on_install_event and/or on_update_event
"""

from __future__ import annotations

from abc import ABC

from ferry.core.models.events import InstallEvent, UpdateEvent


class InstallObserver(ABC):
    """Receives install and update events, strictly in pipeline order.

    Both hooks default to doing nothing so an observer only implements
    the stream it cares about.
    """

    name: str = "observer"

    def on_install_event(self, event: InstallEvent) -> None:
        """Called for each install-pipeline event."""

    def on_update_event(self, event: UpdateEvent) -> None:
        """Called for each registry-update event."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class NullObserver(InstallObserver):
    """Discards every event."""

    name = "null"


NULL_OBSERVER = NullObserver()
