"""Shared data type definitions (RawFile, BreadcrumbEntry)."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class RawFile:
    """
    An item picked for upload, before it enters the upload queue.

    `payload` is an opaque handle (a path, a file object, bytes); the
    pipeline never reads it.
    """
    name: str
    size: int
    type: str
    payload: Optional[Any] = None


@dataclass(frozen=True)
class BreadcrumbEntry:
    """
    One step of a root-to-leaf folder path.
    """
    id: str
    name: str
