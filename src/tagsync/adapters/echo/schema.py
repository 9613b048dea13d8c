"""Pydantic models describing the event payload posted to Echo."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from tagsync.domain.model import TaggedImageEvent


class EchoBaseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EventDetails(EchoBaseModel):
    type: str
    source: str


class ContentPayload(EchoBaseModel):
    registry: str
    repository: str
    tag: str
    digest: str | None = None
    account: str


class ArtifactPayload(EchoBaseModel):
    type: str
    name: str
    version: str
    reference: str
    metadata: dict[str, str] = Field(default_factory=dict[str, str])


class EventPayload(EchoBaseModel):
    details: EventDetails
    content: ContentPayload
    artifact: ArtifactPayload

    @classmethod
    def from_event(cls, event: TaggedImageEvent, *, source: str) -> EventPayload:
        content = event.content
        artifact = event.artifact
        return cls(
            details=EventDetails(type=event.type, source=source),
            content=ContentPayload(
                registry=content.registry,
                repository=content.repository,
                tag=content.tag,
                digest=content.digest,
                account=content.account,
            ),
            artifact=ArtifactPayload(
                type=artifact.type,
                name=artifact.name,
                version=artifact.version,
                reference=artifact.reference,
                metadata=dict(artifact.metadata),
            ),
        )
