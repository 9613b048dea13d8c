"""Observed image tags."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TaggedImage:
    """One tag observed in a remote registry during a poll.

    ``digest`` is ``None`` when the remote source could not resolve the manifest.
    """

    account: str
    registry: str
    repository: str
    tag: str
    digest: str | None = None

    @property
    def reference(self) -> str:
        return f"{self.registry}/{self.repository}:{self.tag}"
