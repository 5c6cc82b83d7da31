"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_int, optional_env_str
from .errors import ConfigurationError
from .logging import configure_logging
from .transport import (
    DEFAULT_UPLOAD_CHUNK_SIZE,
    DEFAULT_USER_AGENT,
    TransportConfig,
    get_transport_config,
)

__all__ = [
    "DEFAULT_UPLOAD_CHUNK_SIZE",
    "DEFAULT_USER_AGENT",
    "ConfigurationError",
    "TransportConfig",
    "configure_logging",
    "get_transport_config",
    "optional_env_int",
    "optional_env_str",
]
