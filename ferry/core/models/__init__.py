"""
Domain models — Pydantic types for the engine.

All models are re-exported here for convenient access:

    from ferry.core.models import PackageManifest, State, InstallResult
"""

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
from ferry.core.models.lookup import Absent, Found, Lookup
from ferry.core.models.manifest import PackageManifest, TargetDefinition
from ferry.core.models.release import ImportCandidate, Release, ReleaseAsset, ScoredAsset
from ferry.core.models.results import (
    CleanResult,
    InstallResult,
    PackageActionOutcome,
    UninstallResult,
    UpdateResult,
    UpgradedPackage,
    UpgradeResult,
)
from ferry.core.models.state import InstalledPackage, State

__all__ = [
    # lookup.py
    "Absent",
    "CleanResult",
    # events.py
    "Downloading",
    "Extracting",
    "Fetching",
    "Found",
    "ImportCandidate",
    "InstallEvent",
    "InstallResult",
    # state.py
    "InstalledPackage",
    "Lookup",
    "PackageActionOutcome",
    # manifest.py
    "PackageManifest",
    "Progress",
    # release.py
    "Release",
    "ReleaseAsset",
    "ScoredAsset",
    "State",
    "Success",
    "TargetDefinition",
    "UninstallResult",
    "Unpacking",
    "UpdateEvent",
    "UpdateResult",
    "UpgradeResult",
    "UpgradedPackage",
    "VerifyingChecksum",
]
