"""
Shared test fixtures and configuration.

``LocalRegistry`` simulates a registry checkout on disk: real .tar.gz
packages next to ``packages/<letter>/<name>.toml`` manifests whose URLs
are ``file://`` links, so the whole pipeline runs without network.
"""

from __future__ import annotations

import hashlib
import io
import tarfile
import textwrap
from pathlib import Path

import pytest

from ferry.core.context import EngineContext
from ferry.core.platform import current_target


def build_tarball(entries: dict[str, bytes], mode: int = 0o755) -> bytes:
    """Build .tar.gz bytes holding ``entries`` (archive path → content)."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, data in entries.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(data)
            info.mode = mode
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def sha256_of(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def script_for(name: str, version: str) -> bytes:
    return f"#!/bin/sh\necho 'Hello from {name} v{version}'\n".encode()


class LocalRegistry:
    """A registry source directory with packages built on demand."""

    def __init__(self, path: Path):
        self.path = path
        (self.path / "packages").mkdir(parents=True, exist_ok=True)

    @property
    def source(self) -> str:
        return str(self.path)

    def add_package(
        self,
        name: str,
        version: str,
        bin_name: str | None = None,
        *,
        target: str | None = None,
        checksum: str | None = None,
        content: bytes | None = None,
        description: str = "Mock package",
    ) -> bytes:
        """Write an archive and its manifest; return the archive bytes."""
        bin_name = bin_name or name
        target = target or current_target()
        content = content if content is not None else script_for(name, version)

        archive = build_tarball({f"{name}-{version}/{bin_name}": content})
        archive_path = self.path / f"{name}-{version}.tar.gz"
        archive_path.write_bytes(archive)

        digest = checksum or sha256_of(archive)
        manifest = textwrap.dedent(f"""\
            version = "{version}"
            description = "{description}"

            [targets.{target}]
            url = "{archive_path.as_uri()}"
            bin = "{bin_name}"
            sha256 = "{digest}"
        """)
        self.write_manifest(name, manifest)
        return archive

    def write_manifest(self, name: str, text: str) -> Path:
        path = self.path / "packages" / name[0] / f"{name}.toml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path


@pytest.fixture
def make_tarball():
    """Factory for in-memory .tar.gz archives."""
    return build_tarball


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Isolated installation root."""
    root = tmp_path / "home"
    root.mkdir()
    return root


@pytest.fixture
def registry(tmp_path: Path) -> LocalRegistry:
    """Empty local registry source."""
    return LocalRegistry(tmp_path / "registry_source")


@pytest.fixture
def engine(home: Path, registry: LocalRegistry) -> EngineContext:
    """Engine context over ``home`` syncing from ``registry``."""
    return EngineContext.create(home, registry.source)


@pytest.fixture
def target() -> str:
    """Target triple of the machine running the tests."""
    return current_target()
