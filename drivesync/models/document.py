"""
Domain models for the synced document.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class NoDataReason(str, Enum):
    """Why a pull produced no usable document."""

    EMPTY = "empty"
    MALFORMED = "malformed"


@dataclass(frozen=True, slots=True)
class NoData:
    """Result of a pull when the remote file holds nothing usable.

    Not an error: callers fall back to their defaults. ``MALFORMED`` means the
    remote bytes could not be decoded and would be overwritten by the next push.
    """

    reason: NoDataReason

    def __bool__(self) -> bool:
        return False


SyncDocument = Any
PullResult = Union[SyncDocument, NoData]


__all__ = ["NoData", "NoDataReason", "PullResult", "SyncDocument"]
