"""Translate Clouddriver payloads into domain objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tagsync.domain.model import RegistryAccount, TaggedImage

if TYPE_CHECKING:
    from .schema import CredentialsPayload, TaggedImagePayload


def parse_tagged_image(payload: TaggedImagePayload | None, *, account: str) -> TaggedImage | None:
    if payload is None:
        return None
    return TaggedImage(
        account=payload.account or account,
        registry=payload.registry,
        repository=payload.repository,
        tag=payload.tag,
        digest=payload.digest,
    )


def parse_account(payload: CredentialsPayload) -> RegistryAccount:
    return RegistryAccount(
        name=payload.name,
        registry=payload.registry,
        track_digests=payload.track_digests,
        item_upper_threshold=payload.item_upper_threshold,
    )
