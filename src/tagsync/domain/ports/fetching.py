"""Ports for reading registry state from external providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tagsync.domain.model import AccountSnapshot, TaggedImage


class ImageSourceError(RuntimeError):
    """Raised when the remote source cannot list the images of an account."""

    def __init__(self, message: str, *, account: str | None = None) -> None:
        super().__init__(message)
        self.account = account


@runtime_checkable
class TaggedImageSource(Protocol):
    """Lists every tag currently visible for one account.

    Entries may be ``None``; callers skip them.
    """

    def list_images(self, account: str) -> Sequence[TaggedImage | None]: ...


@runtime_checkable
class AccountRegistry(Protocol):
    """Source of the accounts to reconcile."""

    def refresh(self) -> AccountSnapshot:
        """Reload the account list and return it as a new snapshot."""
        ...

    def snapshot(self) -> AccountSnapshot:
        """Return the snapshot produced by the last refresh."""
        ...


__all__ = ["AccountRegistry", "ImageSourceError", "TaggedImageSource"]
