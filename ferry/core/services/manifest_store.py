"""
Manifest store — per-package TOML files sharded by first letter.

Reads go against the synced cache (``<registry_dir>/packages``); writes go
against a developer's local registry checkout (``<source>/packages``).

    packages/f/fzf.toml
    packages/r/ripgrep.toml

A missing or unparsable manifest is never an error on the read side: it
is ``Absent`` on lookup and silently skipped when listing.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from ferry.core.config.loader import REGISTRY_ENV, ConfigError
from ferry.core.context import EngineContext
from ferry.core.errors import ManifestError
from ferry.core.models.lookup import INVALID, Absent, Found, Lookup
from ferry.core.models.manifest import PackageManifest, TargetDefinition

logger = logging.getLogger(__name__)

MANIFEST_SUFFIX = ".toml"


def manifest_path(packages_dir: Path, name: str) -> Path:
    """``<packages_dir>/<first letter>/<name>.toml``."""
    return packages_dir / name[0] / f"{name}{MANIFEST_SUFFIX}"


def parse_manifest(text: str) -> PackageManifest:
    """Parse TOML text into a manifest.

    Raises:
        tomllib.TOMLDecodeError, ValidationError: On bad input.
    """
    return PackageManifest.model_validate(tomllib.loads(text))


def dump_manifest(manifest: PackageManifest) -> str:
    return tomli_w.dumps(manifest.to_toml_dict())


def read_manifest(path: Path) -> Lookup[PackageManifest]:
    """Read one manifest file, reporting missing and corrupt as ``Absent``."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Absent(path)
    except (OSError, UnicodeDecodeError) as e:
        return Absent(path, INVALID, str(e))

    try:
        return Found(parse_manifest(text))
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        return Absent(path, INVALID, str(e))


def find_package(ctx: EngineContext, name: str) -> PackageManifest | None:
    """Look up a package in the synced cache (e.g. ``packages/f/fzf.toml``)."""
    if not name:
        return None

    result = read_manifest(manifest_path(ctx.packages_dir, name))
    if isinstance(result, Found):
        return result.value
    if result.invalid:
        logger.debug("Ignoring corrupt manifest %s: %s", result.path, result.detail)
    return None


def list_available_packages(ctx: EngineContext) -> list[tuple[str, PackageManifest]]:
    """Every parsable manifest in the cache, sorted by package name.

    Only ``packages/<letter>/<name>.toml`` is considered: exactly two
    directory levels below the packages root.
    """
    packages_dir = ctx.packages_dir
    if not packages_dir.is_dir():
        return []

    results: list[tuple[str, PackageManifest]] = []
    for shard in packages_dir.iterdir():
        if not shard.is_dir():
            continue
        for path in shard.iterdir():
            if not path.is_file() or path.suffix != MANIFEST_SUFFIX:
                continue
            result = read_manifest(path)
            if isinstance(result, Found):
                results.append((path.stem, result.value))
            else:
                logger.debug("Skipping %s (%s)", path, result.detail or result.reason)

    results.sort(key=lambda item: item[0])
    return results


def ensure_local_registry(registry_source: str) -> Path:
    """Return the registry source as a directory, or fail with guidance.

    Raises:
        ConfigError: The source is empty, missing, or not a directory.
    """
    source_path = Path(registry_source)
    if not registry_source or not source_path.is_dir():
        raise ConfigError(
            f"{REGISTRY_ENV} must be set to your local git repository path "
            "to alter the local registry.\n"
            f'Try:\n\texport {REGISTRY_ENV}="$(pwd)"'
        )
    return source_path


def write_package_manifest(
    registry_source: str,
    name: str,
    version: str,
    target_triple: str,
    url: str,
    bin_name: str | None,
    sha256: str,
) -> Path:
    """Create or update ``packages/<letter>/<name>.toml`` in a local registry.

    The version is always overwritten; ``target_triple`` is inserted or
    replaced and every other target is preserved.

    Returns:
        Path of the written manifest.

    Raises:
        ConfigError: The registry source is not a local directory.
        ManifestError: ``name`` is empty or the target is invalid.
    """
    source_path = ensure_local_registry(registry_source)
    if not name:
        raise ManifestError("Package name empty")

    path = manifest_path(source_path / "packages", name)
    path.parent.mkdir(parents=True, exist_ok=True)

    existing = read_manifest(path)
    if isinstance(existing, Found):
        manifest = existing.value
    else:
        if existing.invalid:
            logger.warning("Replacing corrupt manifest %s: %s", path, existing.detail)
        manifest = PackageManifest(version=version)

    try:
        target = TargetDefinition(url=url, bin=bin_name or name, sha256=sha256)
    except ValidationError as e:
        raise ManifestError(f"Invalid target for {name}: {e}") from e

    manifest.version = version
    manifest.upsert_target(target_triple, target)

    path.write_text(dump_manifest(manifest), encoding="utf-8")
    logger.info("Wrote %s (%s, %s)", path, version, target_triple)
    return path
