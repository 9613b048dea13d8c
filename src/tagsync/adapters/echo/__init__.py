"""Public interface for the Echo adapter."""

from __future__ import annotations

from .client import EchoAPIError, EchoEventSink
from .schema import EventPayload

__all__ = ["EchoAPIError", "EchoEventSink", "EventPayload"]
