"""
Content fetcher — bytes from an HTTP(S) URL, a file:// URL or a local path.

Progress is pushed to a callback as install events: one ``Downloading``
followed by ``Progress`` events.  Streamed downloads report one event per
8 KiB chunk; local files report a synthetic 0 → total pair.

Failures are surfaced verbatim as ``FetchError`` and never retried.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Callable

from ferry.core.context import EngineContext
from ferry.core.errors import FetchError
from ferry.core.models.events import Downloading, InstallEvent, Progress

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192

EventSink = Callable[[InstallEvent], None]


def _discard(_event: InstallEvent) -> None:
    pass


def is_remote(source: str) -> bool:
    return urllib.parse.urlparse(source).scheme in ("http", "https")


def local_path(source: str) -> Path:
    """Filesystem path for a ``file://`` URL or a plain path."""
    if source.startswith("file://"):
        parsed = urllib.parse.urlparse(source)
        return Path(urllib.request.url2pathname(parsed.netloc + parsed.path))
    return Path(source)


def fetch(
    ctx: EngineContext,
    source: str,
    on_event: EventSink | None = None,
) -> bytes:
    """Retrieve the full content of ``source``.

    Args:
        ctx: Engine context (User-Agent and timeout for HTTP).
        source: ``http(s)://`` URL, ``file://`` URL or local path.
        on_event: Receives ``Downloading`` then ``Progress`` events.

    Raises:
        FetchError: Unreachable host, non-2xx status, or missing file.
    """
    emit = on_event or _discard
    if is_remote(source):
        return _fetch_http(ctx, source, emit)
    return _fetch_file(local_path(source), emit)


def _fetch_file(path: Path, emit: EventSink) -> bytes:
    try:
        total = path.stat().st_size
        emit(Downloading(total=total))
        emit(Progress(bytes=0, total=total))
        content = path.read_bytes()
    except OSError as e:
        raise FetchError(str(e)) from e

    emit(Progress(bytes=total, total=total))
    logger.debug("Read %d bytes from %s", len(content), path)
    return content


def _fetch_http(ctx: EngineContext, url: str, emit: EventSink) -> bytes:
    req = urllib.request.Request(url, headers={"User-Agent": ctx.user_agent})
    logger.info("Downloading %s", url)
    try:
        with urllib.request.urlopen(req, timeout=ctx.timeout) as resp:
            total = int(resp.headers.get("Content-Length") or 0)
            emit(Downloading(total=total))
            emit(Progress(bytes=0, total=total))

            chunks: list[bytes] = []
            while True:
                chunk = resp.read(CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
                emit(Progress(bytes=len(chunk), total=total))
    except urllib.error.HTTPError as e:
        raise FetchError(f"{e} for url ({url})") from e
    except (urllib.error.URLError, OSError, ValueError) as e:
        raise FetchError(f"Request to {url} failed: {e}") from e

    content = b"".join(chunks)
    logger.debug("Downloaded %d bytes from %s", len(content), url)
    return content
