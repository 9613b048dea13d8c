"""HTTP event sink posting tag events to Echo."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from tagsync.adapters.http_resilience import ResilientClient, default_client_factory

from .schema import EventPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from tagsync.config import EchoConfig, ResilienceConfig
    from tagsync.domain.model import TaggedImageEvent

log = getLogger(__name__)


class EchoAPIError(RuntimeError):
    """Raised when an event could not be delivered."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class EchoEventSink:
    config: EchoConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    def post_event(self, event: TaggedImageEvent) -> None:
        payload = EventPayload.from_event(event, source=self.config.source)
        asyncio.run(self._post_async(payload))

    async def _post_async(self, payload: EventPayload) -> None:
        url = f"{self.config.base_url}/"
        async with self.client_factory(self.config.resilience) as client:
            try:
                response = await client.post(url, json=payload.model_dump(mode="json"))
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise EchoAPIError(
                    f"Echo rejected event for {payload.artifact.reference}",
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.HTTPError as exc:
                raise EchoAPIError(f"Could not reach Echo at {url}: {exc}") from exc
        log.debug("Posted event for %s", payload.artifact.reference)


if TYPE_CHECKING:
    from tagsync.domain.ports import EventSink

    def _sink_check(sink: EchoEventSink) -> EventSink:
        return sink
