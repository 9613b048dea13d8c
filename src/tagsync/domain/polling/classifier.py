"""Decide whether an observed tag carries new information."""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Set

    from tagsync.domain.model import TaggedImage
    from tagsync.domain.ports import ImageCache

log = getLogger(__name__)


class ChangeKind(StrEnum):
    NEW = "new"
    CHANGED = "changed"
    UNCHANGED = "unchanged"

    @property
    def needs_commit(self) -> bool:
        return self is not ChangeKind.UNCHANGED


def classify(
    cached_images: Set[str],
    image_key: str,
    image: TaggedImage,
    *,
    track_digests: bool,
    cache: ImageCache,
) -> ChangeKind:
    """Classify ``image`` against the account's cached keys.

    A key missing from ``cached_images`` is always new. A known key only counts
    as changed when digest tracking is enabled and both the stored and the
    observed digest are present and differ. A ``None`` on either side means a
    manifest lookup failed in this or an earlier cycle, so the read is treated
    as indeterminate and reported as unchanged.
    """

    if image_key not in cached_images:
        return ChangeKind.NEW
    if not track_digests:
        return ChangeKind.UNCHANGED

    last_digest = cache.last_digest(image.account, image.repository, image.tag)
    if last_digest == image.digest:
        return ChangeKind.UNCHANGED

    if image.digest is None or last_digest is None:
        log.info(
            "Ignoring indeterminate digest for %s (account=%s): [%s] -> [%s]",
            image_key,
            image.account,
            last_digest,
            image.digest,
        )
        return ChangeKind.UNCHANGED

    log.info(
        "Updated tagged image %s (account=%s). Digest changed from [%s] -> [%s].",
        image_key,
        image.account,
        last_digest,
        image.digest,
    )
    return ChangeKind.CHANGED
