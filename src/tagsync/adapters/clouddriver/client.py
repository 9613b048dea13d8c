"""HTTP client for the Clouddriver registry endpoints."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from tagsync.adapters.http_resilience import ResilientClient, default_client_factory
from tagsync.config import ClouddriverConfig, get_clouddriver_config
from tagsync.domain.model import AccountSnapshot
from tagsync.domain.ports import ImageSourceError

from .schema import CREDENTIALS, TAGGED_IMAGES
from .translator import parse_account, parse_tagged_image

if TYPE_CHECKING:
    from collections.abc import Callable

    from tagsync.config import ResilienceConfig
    from tagsync.domain.model import TaggedImage

log = getLogger(__name__)

IMAGES_PATH = "/dockerRegistry/images/find"
CREDENTIALS_PATH = "/credentials"


class ClouddriverAPIError(ImageSourceError):
    """Raised when Clouddriver cannot be reached or answers with an unusable payload."""


async def _get_json(
    client: ResilientClient,
    url: str,
    *,
    params: dict[str, str],
    account: str | None = None,
) -> object:
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as exc:
        raise ClouddriverAPIError(f"Request to {url} failed: {exc}", account=account) from exc
    except ValueError as exc:
        raise ClouddriverAPIError(f"Invalid JSON from {url}", account=account) from exc


@dataclass(slots=True)
class ClouddriverImageSource:
    config: ClouddriverConfig = field(default_factory=get_clouddriver_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    def list_images(self, account: str) -> list[TaggedImage | None]:
        return asyncio.run(self._list_images_async(account))

    async def _list_images_async(self, account: str) -> list[TaggedImage | None]:
        url = f"{self.config.base_url}{IMAGES_PATH}"
        params = {"account": account, "includeDetails": "true"}
        async with self.client_factory(self.config.resilience) as client:
            payload = await _get_json(client, url, params=params, account=account)
        try:
            images = TAGGED_IMAGES.validate_python(payload)
        except ValidationError as exc:
            raise ClouddriverAPIError(
                f"Unexpected image listing payload for account {account}", account=account
            ) from exc
        return [parse_tagged_image(image, account=account) for image in images]


@dataclass(slots=True)
class ClouddriverAccountRegistry:
    config: ClouddriverConfig = field(default_factory=get_clouddriver_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    _snapshot: AccountSnapshot = field(default_factory=AccountSnapshot, init=False)

    def refresh(self) -> AccountSnapshot:
        self._snapshot = asyncio.run(self._fetch_accounts_async())
        log.debug("Refreshed registry accounts: %s", ", ".join(self._snapshot.names()))
        return self._snapshot

    def snapshot(self) -> AccountSnapshot:
        return self._snapshot

    async def _fetch_accounts_async(self) -> AccountSnapshot:
        url = f"{self.config.base_url}{CREDENTIALS_PATH}"
        async with self.client_factory(self.config.resilience) as client:
            payload = await _get_json(client, url, params={"expand": "true"})
        try:
            credentials = CREDENTIALS.validate_python(payload)
        except ValidationError as exc:
            raise ClouddriverAPIError("Unexpected credentials payload") from exc
        return AccountSnapshot.of(
            parse_account(item)
            for item in credentials
            if item.provider == self.config.provider_type
        )


if TYPE_CHECKING:
    from tagsync.domain.ports import AccountRegistry, TaggedImageSource

    _source_check: TaggedImageSource = ClouddriverImageSource()
    _registry_check: AccountRegistry = ClouddriverAccountRegistry()
