"""Commit a polling delta to the cache and notify downstream."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from tagsync.domain.model import TaggedImageEvent

from .metrics import MISSED_NOTIFICATION

if TYPE_CHECKING:
    from collections.abc import Set

    from tagsync.domain.model import TaggedImage
    from tagsync.domain.ports import EventSink, ImageCache

    from .delta import PollingDelta
    from .metrics import MonitorMetrics

log = getLogger(__name__)


def commit_delta(
    delta: PollingDelta,
    *,
    send_events: bool,
    cache: ImageCache,
    sink: EventSink | None,
    metrics: MonitorMetrics,
    monitor_name: str,
) -> None:
    """Persist every observed digest, then notify or record the dropped event.

    Cache entries are only ever added or overwritten. Keys that disappeared from
    the remote listing are left alone: an incomplete read from the source or the
    cache must never look like a deletion.
    """

    for item in delta.items:
        image = item.image
        cache.set_last_digest(image.account, image.repository, image.tag, image.digest)
        log.info(
            "New tagged image %s (account=%s). Digest is now [%s].",
            item.image_key,
            image.account,
            image.digest,
        )
        if send_events:
            post_event(
                delta.cached_images,
                image,
                item.image_key,
                sink=sink,
                metrics=metrics,
                monitor_name=monitor_name,
            )
        else:
            metrics.increment(MISSED_NOTIFICATION, monitor=monitor_name, reason="fastForward")


def post_event(
    cached_images: Set[str],
    image: TaggedImage,
    image_key: str,
    *,
    sink: EventSink | None,
    metrics: MonitorMetrics,
    monitor_name: str,
) -> None:
    if sink is None:
        log.warning("Cannot send tagged image notification: event sink is not configured")
        metrics.increment(MISSED_NOTIFICATION, monitor=monitor_name, reason="sinkDisabled")
        return
    if not cached_images:
        # no indexed images for this account yet (first run or a flushed cache)
        return

    log.info("Sending tagged image %s (account=%s) to event sink", image_key, image.account)
    sink.post_event(TaggedImageEvent.from_image(image))
