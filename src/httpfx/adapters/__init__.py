"""Concrete transports for the effect layer."""

from __future__ import annotations

from .httpx_transport import HttpxChannel, HttpxTransport

__all__ = ["HttpxChannel", "HttpxTransport"]
