"""
Terminal observer — renders engine events with click.

Download progress uses ``click.progressbar`` when the size is known and
a plain status line otherwise.
"""

from __future__ import annotations

from typing import Any

import click

from ferry.adapters.base import InstallObserver
from ferry.core.models.events import (
    Downloading,
    Extracting,
    Fetching,
    InstallEvent,
    Progress,
    Success,
    Unpacking,
    UpdateEvent,
    VerifyingChecksum,
)


class ClickProgressObserver(InstallObserver):
    """Draws a progress bar for downloads and one line per stage."""

    name = "click"

    def __init__(self, quiet: bool = False) -> None:
        self._quiet = quiet
        self._bar: Any = None

    def on_install_event(self, event: InstallEvent) -> None:
        if self._quiet:
            return
        if isinstance(event, Downloading):
            self._start_bar(event.total, "   Downloading")
        elif isinstance(event, Progress):
            self._advance(event)
        elif isinstance(event, VerifyingChecksum):
            self._finish_bar()
            click.echo("   🔐 Verifying checksum...")
        elif isinstance(event, Extracting):
            click.echo("   📦 Extracting...")
        elif isinstance(event, Success):
            self._finish_bar()

    def on_update_event(self, event: UpdateEvent) -> None:
        if self._quiet:
            return
        if isinstance(event, Fetching):
            click.echo(f"🔄 Updating registry from {event.source}")
        elif isinstance(event, Progress):
            if self._bar is None and event.total:
                self._start_bar(event.total, "   Fetching")
            self._advance(event)
        elif isinstance(event, Unpacking):
            self._finish_bar()
            click.echo("   📦 Unpacking...")

    def _start_bar(self, total: int, label: str) -> None:
        self._finish_bar()
        if total > 0:
            self._bar = click.progressbar(length=total, label=label)
            self._bar.render_progress()
        else:
            click.echo(f"{label} (size unknown)...")

    def _advance(self, event: Progress) -> None:
        if self._bar is not None and event.bytes:
            self._bar.update(event.bytes)

    def _finish_bar(self) -> None:
        if self._bar is not None:
            self._bar.render_finish()
            self._bar = None
