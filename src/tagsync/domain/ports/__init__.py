"""Domain port definitions for adapters."""

from __future__ import annotations

from .coordination import KeysMigration, LockManager
from .fetching import AccountRegistry, ImageSourceError, TaggedImageSource
from .notification import EventSink
from .persistence import ImageCache

__all__ = [
    "AccountRegistry",
    "EventSink",
    "ImageCache",
    "ImageSourceError",
    "KeysMigration",
    "LockManager",
    "TaggedImageSource",
]
