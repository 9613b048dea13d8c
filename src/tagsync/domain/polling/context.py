"""Per-partition poll context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tagsync.domain.model import RegistryAccount


@dataclass(frozen=True, slots=True)
class PollContext:
    """What one poll of one partition works on.

    ``fast_forward`` commits observations without emitting events, which is how
    an empty or stale cache is brought up to date without a notification backlog.
    """

    partition_name: str
    account: RegistryAccount
    fast_forward: bool = False
