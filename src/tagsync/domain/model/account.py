"""Registry accounts and the per-cycle account snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class RegistryAccount:
    """One independently reconciled partition (a registry credential/scope)."""

    name: str
    registry: str | None = None
    track_digests: bool = False
    item_upper_threshold: int | None = None


@dataclass(frozen=True, slots=True)
class AccountSnapshot:
    """Immutable view of the account list produced by one registry refresh."""

    accounts: tuple[RegistryAccount, ...] = ()

    @classmethod
    def of(cls, accounts: Iterable[RegistryAccount]) -> AccountSnapshot:
        return cls(accounts=tuple(accounts))

    def find(self, name: str) -> RegistryAccount | None:
        for account in self.accounts:
            if account.name == name:
                return account
        return None

    def names(self) -> tuple[str, ...]:
        return tuple(account.name for account in self.accounts)

    def __iter__(self) -> Iterator[RegistryAccount]:
        return iter(self.accounts)

    def __len__(self) -> int:
        return len(self.accounts)
