"""Adapters — observers that receive engine events.

Public re-exports for convenient access.
"""

from ferry.adapters.base import NULL_OBSERVER, InstallObserver, NullObserver
from ferry.adapters.recording import RecordingObserver

__all__ = [
    "InstallObserver",
    "NULL_OBSERVER",
    "NullObserver",
    "RecordingObserver",
]
