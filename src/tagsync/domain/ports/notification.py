"""Ports for delivering tag events downstream."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tagsync.domain.model import TaggedImageEvent


@runtime_checkable
class EventSink(Protocol):
    def post_event(self, event: TaggedImageEvent) -> None: ...
