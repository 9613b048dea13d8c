"""Per-account delta generation."""

from __future__ import annotations

import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from tagsync.domain.model import image_key

from .classifier import ChangeKind, classify

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tagsync.domain.model import RegistryAccount, TaggedImage
    from tagsync.domain.ports import ImageCache, TaggedImageSource

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImageDelta:
    """One observation to commit this cycle."""

    image_key: str
    image: TaggedImage
    kind: ChangeKind = ChangeKind.NEW


@dataclass(frozen=True, slots=True)
class PollingDelta:
    """Commit candidates for one account plus its key snapshot at cycle start."""

    items: tuple[ImageDelta, ...]
    cached_images: frozenset[str]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ImageDelta]:
        return iter(self.items)


def generate_delta(
    account: RegistryAccount,
    *,
    source: TaggedImageSource,
    cache: ImageCache,
    key_prefix: str,
) -> PollingDelta:
    """List the account's images and keep those that are new or changed.

    Failures of the remote listing propagate before the cache is read, so a
    failed account never yields a partial delta.
    """

    log.debug("Checking new tags for %s", account.name)

    started = time.monotonic()
    images = source.list_images(account.name)
    log.debug(
        "Took %.0fms to retrieve images (account=%s)",
        (time.monotonic() - started) * 1000,
        account.name,
    )

    cached_images = frozenset(cache.images(account.name))

    items: list[ImageDelta] = []
    for image in images:
        if image is None:
            continue
        key = image_key(key_prefix, account.name, image.repository, image.tag)
        kind = classify(
            cached_images,
            key,
            image,
            track_digests=account.track_digests,
            cache=cache,
        )
        if kind.needs_commit:
            items.append(ImageDelta(image_key=key, image=image, kind=kind))

    log.info("Found %s new images for %s", len(items), account.name)
    return PollingDelta(items=tuple(items), cached_images=cached_images)
