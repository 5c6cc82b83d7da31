"""Transport port used by the request launcher.

The launcher only talks to the network through these two protocols, so the
effect layer stays transport agnostic and tests can drive it with fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from .expect import ResponseMode


class InvalidRequestUrl(ValueError):
    """Raised by ``Transport.open`` when the URL cannot be used."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid request URL: {url!r}")
        self.url = url


@dataclass(frozen=True, slots=True, kw_only=True)
class RawResponse:
    """What a channel reports once a response has been read completely.

    ``raw_headers`` is a CRLF separated ``name: value`` block and ``body`` is
    ``str`` or ``bytes`` depending on the channel's response mode.
    """

    url: str
    status_code: int
    status_text: str
    raw_headers: str
    body: str | bytes


@runtime_checkable
class Channel(Protocol):
    """One transport operation, configured before ``send`` is called."""

    def set_header(self, name: str, value: str) -> None: ...

    def set_timeout(self, timeout_ms: int) -> None: ...

    def set_response_mode(self, mode: ResponseMode) -> None: ...

    def set_credentials_policy(self, allow_cross_origin: bool) -> None: ...

    def on_error(self, listener: Callable[[], None]) -> None: ...

    def on_timeout(self, listener: Callable[[], None]) -> None: ...

    def on_load(self, listener: Callable[[RawResponse], None]) -> None: ...

    def on_upload_progress(self, listener: Callable[[int, int], None]) -> None: ...

    def on_download_progress(self, listener: Callable[[int, int | None], None]) -> None: ...

    def send(self, body: bytes | None) -> None: ...

    def abort(self) -> None: ...


@runtime_checkable
class Transport(Protocol):
    def open(self, method: str, url: str) -> Channel:
        """Create a channel; raise ``InvalidRequestUrl`` for unusable URLs."""
        ...


__all__ = ["Channel", "InvalidRequestUrl", "RawResponse", "Transport"]
