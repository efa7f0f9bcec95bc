"""
Developer tools — author manifests in a local registry checkout.

Both tools require ``registry_source`` to point at a local directory;
they never touch the synced cache.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from pathlib import Path

from pydantic import ValidationError

from ferry.adapters.base import NULL_OBSERVER, InstallObserver
from ferry.core.context import EngineContext
from ferry.core.errors import FetchError
from ferry.core.models.events import VerifyingChecksum
from ferry.core.models.release import ImportCandidate, Release
from ferry.core.services.asset_scoring import build_candidates_from_release
from ferry.core.services.checksum import sha256_hex
from ferry.core.services.fetch import fetch
from ferry.core.services.manifest_store import ensure_local_registry, write_package_manifest

logger = logging.getLogger(__name__)


def add_package_manual(
    ctx: EngineContext,
    name: str,
    version: str,
    target_triple: str,
    url: str,
    bin_name: str | None = None,
    observer: InstallObserver = NULL_OBSERVER,
) -> Path:
    """Download ``url``, hash it, and upsert the target into the manifest.

    Returns:
        Path of the written manifest.
    """
    emit = observer.on_install_event
    content = fetch(ctx, url, emit)

    emit(VerifyingChecksum())
    sha256 = sha256_hex(content)
    logger.info("sha256(%s) = %s", url, sha256)

    return write_package_manifest(
        ctx.registry_source,
        name,
        version,
        target_triple,
        url,
        bin_name,
        sha256,
    )


def fetch_release(ctx: EngineContext, repo: str) -> Release:
    """Fetch the latest release of ``owner/repo`` from the GitHub API.

    Raises:
        FetchError: Request failed or the payload is not a release.
    """
    api_url = f"{ctx.github_api.rstrip('/')}/repos/{repo}/releases/latest"
    req = urllib.request.Request(
        api_url,
        headers={
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": ctx.user_agent,
        },
    )
    logger.info("Fetching release metadata: %s", api_url)
    try:
        with urllib.request.urlopen(req, timeout=ctx.timeout) as resp:
            data = json.loads(resp.read())
    except urllib.error.HTTPError as e:
        raise FetchError(f"{e} for url ({api_url})") from e
    except (urllib.error.URLError, OSError, ValueError) as e:
        raise FetchError(f"Failed to fetch release: {e}") from e

    try:
        return Release.model_validate(data)
    except ValidationError as e:
        raise FetchError(f"Unexpected release payload from {api_url}: {e}") from e


def fetch_github_import_candidates(
    ctx: EngineContext,
    repo: str,
) -> tuple[str, str, list[ImportCandidate]]:
    """Rank the latest release of ``repo`` for every import target.

    Returns:
        ``(package_name, version, candidates)``.

    Raises:
        ConfigError: The registry source is not a local directory.
        FetchError: The release could not be fetched.
    """
    ensure_local_registry(ctx.registry_source)

    release = fetch_release(ctx, repo)
    parts = repo.split("/")
    package_name = parts[1] if len(parts) > 1 and parts[1] else "unknown"

    version, candidates = build_candidates_from_release(release)
    return package_name, version, candidates
