"""Pydantic models describing the Clouddriver payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _none_to_false(value: object) -> object:
    return False if value is None else value


class ClouddriverBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TaggedImagePayload(ClouddriverBaseModel):
    account: str | None = None
    registry: str
    repository: str
    tag: str
    digest: str | None = None

    _normalize_account = field_validator("account", mode="before")(_blank_to_none)
    _normalize_digest = field_validator("digest", mode="before")(_blank_to_none)


class CredentialsPayload(ClouddriverBaseModel):
    name: str
    type: str | None = None
    cloud_provider: str | None = Field(default=None, alias="cloudProvider")
    registry: str | None = Field(default=None, alias="address")
    track_digests: bool = Field(default=False, alias="trackDigests")
    item_upper_threshold: int | None = Field(default=None, alias="itemUpperThreshold")

    _normalize_track_digests = field_validator("track_digests", mode="before")(_none_to_false)

    @property
    def provider(self) -> str | None:
        return self.cloud_provider or self.type


TAGGED_IMAGES = TypeAdapter(list[TaggedImagePayload | None])
CREDENTIALS = TypeAdapter(list[CredentialsPayload])
