"""Events emitted for new or changed tags."""

from __future__ import annotations

from dataclasses import dataclass, field

from .image import TaggedImage

ARTIFACT_TYPE = "docker"
EVENT_TYPE = "docker"


@dataclass(frozen=True, slots=True)
class Artifact:
    type: str
    name: str
    version: str
    reference: str
    metadata: dict[str, str] = field(default_factory=dict[str, str])


@dataclass(frozen=True, slots=True)
class TaggedImageContent:
    registry: str
    repository: str
    tag: str
    digest: str | None
    account: str


@dataclass(frozen=True, slots=True)
class TaggedImageEvent:
    content: TaggedImageContent
    artifact: Artifact
    type: str = EVENT_TYPE

    @classmethod
    def from_image(cls, image: TaggedImage) -> TaggedImageEvent:
        return cls(
            content=TaggedImageContent(
                registry=image.registry,
                repository=image.repository,
                tag=image.tag,
                digest=image.digest,
                account=image.account,
            ),
            artifact=Artifact(
                type=ARTIFACT_TYPE,
                name=image.repository,
                version=image.tag,
                reference=image.reference,
                metadata={"registry": image.registry},
            ),
        )
