"""Errors raised while reading tagsync settings from the environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """An environment variable is set but unusable, e.g. a non-positive threshold."""


class MissingConfigurationError(ConfigurationError):
    """Required variables such as ``CLOUDDRIVER_BASE_URL`` are unset or blank."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")
