"""Public interface for the Clouddriver adapter."""

from __future__ import annotations

from .client import ClouddriverAccountRegistry, ClouddriverAPIError, ClouddriverImageSource
from .schema import CredentialsPayload, TaggedImagePayload
from .translator import parse_account, parse_tagged_image

__all__ = [
    "ClouddriverAPIError",
    "ClouddriverAccountRegistry",
    "ClouddriverImageSource",
    "CredentialsPayload",
    "TaggedImagePayload",
    "parse_account",
    "parse_tagged_image",
]
