"""Domain model for registry tag polling."""

from __future__ import annotations

from .account import AccountSnapshot, RegistryAccount
from .events import Artifact, TaggedImageContent, TaggedImageEvent
from .image import TaggedImage
from .keys import (
    CACHE_ID,
    KEY_VERSION,
    LEGACY_KEY_VERSION,
    ImageKey,
    InvalidImageKeyError,
    LegacyImageKey,
    image_key,
)

__all__ = [
    "CACHE_ID",
    "KEY_VERSION",
    "LEGACY_KEY_VERSION",
    "AccountSnapshot",
    "Artifact",
    "ImageKey",
    "InvalidImageKeyError",
    "LegacyImageKey",
    "RegistryAccount",
    "TaggedImage",
    "TaggedImageContent",
    "TaggedImageEvent",
    "image_key",
]
