"""Ports for the tagged-image cache."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ImageCache(Protocol):
    """Last known digest per image key.

    The key set only grows; there is no delete operation.
    """

    def images(self, account: str) -> set[str]: ...

    def last_digest(self, account: str, repository: str, tag: str) -> str | None: ...

    def set_last_digest(
        self,
        account: str,
        repository: str,
        tag: str,
        digest: str | None,
    ) -> None: ...
