"""
Pipeline events pushed to observers.

Install pipeline, in order::

    Downloading(total) → Progress(bytes, total)* → VerifyingChecksum
        → Extracting → Success

Update pipeline, in order::

    Fetching(source) → Progress(bytes, total)* → Unpacking

``Progress.bytes`` is the number of bytes received since the previous
progress event, so a renderer can add it straight onto a bar.  ``total``
is 0 when the server did not send a Content-Length.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel


class Downloading(BaseModel):
    kind: Literal["downloading"] = "downloading"
    total: int = 0


class Progress(BaseModel):
    kind: Literal["progress"] = "progress"
    bytes: int = 0
    total: int = 0


class VerifyingChecksum(BaseModel):
    kind: Literal["verifying_checksum"] = "verifying_checksum"


class Extracting(BaseModel):
    kind: Literal["extracting"] = "extracting"


class Success(BaseModel):
    kind: Literal["success"] = "success"


class Fetching(BaseModel):
    kind: Literal["fetching"] = "fetching"
    source: str


class Unpacking(BaseModel):
    kind: Literal["unpacking"] = "unpacking"


InstallEvent = Union[Downloading, Progress, VerifyingChecksum, Extracting, Success]
UpdateEvent = Union[Fetching, Progress, Unpacking]
