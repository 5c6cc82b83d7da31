"""Configuration for the httpx transport adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_int, optional_env_str
from .errors import ConfigurationError

DEFAULT_USER_AGENT: Final[str] = "httpfx"
DEFAULT_UPLOAD_CHUNK_SIZE: Final[int] = 64 * 1024


@dataclass(frozen=True, slots=True)
class TransportConfig:
    """Settings shared by every request sent through one transport.

    ``base_url`` resolves relative request URLs; without it they are rejected
    as bad URLs. ``default_headers`` go out before each request's own headers.
    """

    base_url: str | None = None
    default_headers: tuple[tuple[str, str], ...] = ()
    follow_redirects: bool = True
    upload_chunk_size: int = DEFAULT_UPLOAD_CHUNK_SIZE

    def __post_init__(self) -> None:
        if self.upload_chunk_size <= 0:
            msg = f"upload_chunk_size must be positive, got {self.upload_chunk_size}"
            raise ConfigurationError(msg)


def get_transport_config() -> TransportConfig:
    user_agent = optional_env_str("HTTPFX_USER_AGENT") or DEFAULT_USER_AGENT
    return TransportConfig(
        base_url=optional_env_str("HTTPFX_BASE_URL"),
        default_headers=(("User-Agent", user_agent),),
        upload_chunk_size=optional_env_int("HTTPFX_UPLOAD_CHUNK_SIZE", DEFAULT_UPLOAD_CHUNK_SIZE),
    )
