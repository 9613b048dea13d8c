"""Cache keys for tagged images.

Keys are colon separated::

    {prefix}:{cache_id}:v2:{account}:{repository}:{tag}

The legacy ``v1`` layout also carried the registry and had no version segment::

    {prefix}:{cache_id}:{account}:{registry}:{repository}:{tag}

Repositories may contain ``/`` but neither repositories nor tags contain ``:``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

SEPARATOR: Final[str] = ":"
CACHE_ID: Final[str] = "dockerRegistry"
KEY_VERSION: Final[str] = "v2"
LEGACY_KEY_VERSION: Final[str] = "v1"


class InvalidImageKeyError(ValueError):
    """Raised when a string does not follow the expected key layout."""


@dataclass(frozen=True, slots=True)
class ImageKey:
    prefix: str
    account: str
    repository: str
    tag: str
    cache_id: str = CACHE_ID

    def __str__(self) -> str:
        return SEPARATOR.join(
            (self.prefix, self.cache_id, KEY_VERSION, self.account, self.repository, self.tag)
        )

    @classmethod
    def parse(cls, value: str) -> ImageKey:
        parts = value.split(SEPARATOR)
        if len(parts) != 6 or parts[2] != KEY_VERSION:
            raise InvalidImageKeyError(f"Not a {KEY_VERSION} image key: {value!r}")
        prefix, cache_id, _version, account, repository, tag = parts
        return cls(
            prefix=prefix,
            account=account,
            repository=repository,
            tag=tag,
            cache_id=cache_id,
        )


@dataclass(frozen=True, slots=True)
class LegacyImageKey:
    prefix: str
    account: str
    registry: str
    repository: str
    tag: str
    cache_id: str = CACHE_ID

    def __str__(self) -> str:
        return SEPARATOR.join(
            (self.prefix, self.cache_id, self.account, self.registry, self.repository, self.tag)
        )

    @classmethod
    def parse(cls, value: str) -> LegacyImageKey:
        parts = value.split(SEPARATOR)
        if len(parts) != 6 or parts[2] == KEY_VERSION:
            raise InvalidImageKeyError(f"Not a {LEGACY_KEY_VERSION} image key: {value!r}")
        prefix, cache_id, account, registry, repository, tag = parts
        return cls(
            prefix=prefix,
            account=account,
            registry=registry,
            repository=repository,
            tag=tag,
            cache_id=cache_id,
        )

    def upgrade(self) -> ImageKey:
        return ImageKey(
            prefix=self.prefix,
            account=self.account,
            repository=self.repository,
            tag=self.tag,
            cache_id=self.cache_id,
        )


def image_key(prefix: str, account: str, repository: str, tag: str) -> str:
    """Return the string cache key for an (account, repository, tag) triple."""

    return str(ImageKey(prefix=prefix, account=account, repository=repository, tag=tag))
