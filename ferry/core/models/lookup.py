"""
Two-valued lookup result for files that may be missing or corrupt.

Readers of the manifest cache and the state file never raise on bad data.
They return either ``Found(value)`` or ``Absent(path, reason)``, so callers
decide explicitly what "not there" means for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar, Union

T = TypeVar("T")

MISSING = "missing"
INVALID = "invalid"


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class Absent:
    path: Path
    reason: str = MISSING
    detail: str = ""

    @property
    def invalid(self) -> bool:
        return self.reason == INVALID


Lookup = Union[Found[T], Absent]
