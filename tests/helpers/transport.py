"""In-memory transport used to drive the launcher and reconciler in tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from httpfx.domain.expect import ResponseMode
from httpfx.domain.ports import InvalidRequestUrl, RawResponse

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class FakeChannel:
    """Records configuration and lets tests fire transport events by hand.

    Unlike a real transport it keeps firing after ``abort`` so tests can check
    that the launcher suppresses late events itself.
    """

    method: str
    url: str
    headers: list[tuple[str, str]] = field(default_factory=list[tuple[str, str]])
    timeout_ms: int | None = None
    mode: ResponseMode | None = None
    with_credentials: bool | None = None
    sent: bool = False
    body: bytes | None = None
    abort_calls: int = 0
    error_listeners: list[Callable[[], None]] = field(default_factory=list["Callable[[], None]"])
    timeout_listeners: list[Callable[[], None]] = field(
        default_factory=list["Callable[[], None]"]
    )
    load_listeners: list[Callable[[RawResponse], None]] = field(
        default_factory=list["Callable[[RawResponse], None]"]
    )
    upload_listeners: list[Callable[[int, int], None]] = field(
        default_factory=list["Callable[[int, int], None]"]
    )
    download_listeners: list[Callable[[int, int | None], None]] = field(
        default_factory=list["Callable[[int, int | None], None]"]
    )

    def set_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def set_timeout(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms

    def set_response_mode(self, mode: ResponseMode) -> None:
        self.mode = mode

    def set_credentials_policy(self, allow_cross_origin: bool) -> None:
        self.with_credentials = allow_cross_origin

    def on_error(self, listener: Callable[[], None]) -> None:
        self.error_listeners.append(listener)

    def on_timeout(self, listener: Callable[[], None]) -> None:
        self.timeout_listeners.append(listener)

    def on_load(self, listener: Callable[[RawResponse], None]) -> None:
        self.load_listeners.append(listener)

    def on_upload_progress(self, listener: Callable[[int, int], None]) -> None:
        self.upload_listeners.append(listener)

    def on_download_progress(self, listener: Callable[[int, int | None], None]) -> None:
        self.download_listeners.append(listener)

    def send(self, body: bytes | None) -> None:
        self.sent = True
        self.body = body

    def abort(self) -> None:
        self.abort_calls += 1

    def fire_load(
        self,
        *,
        status_code: int = 200,
        body: str | bytes = "",
        raw_headers: str = "",
        status_text: str = "OK",
    ) -> None:
        raw = RawResponse(
            url=self.url,
            status_code=status_code,
            status_text=status_text,
            raw_headers=raw_headers,
            body=body,
        )
        for listener in self.load_listeners:
            listener(raw)

    def fire_error(self) -> None:
        for listener in self.error_listeners:
            listener()

    def fire_timeout(self) -> None:
        for listener in self.timeout_listeners:
            listener()

    def fire_upload(self, sent: int, size: int) -> None:
        for listener in self.upload_listeners:
            listener(sent, size)

    def fire_download(self, received: int, size: int | None) -> None:
        for listener in self.download_listeners:
            listener(received, size)


@dataclass
class FakeTransport:
    """Opens ``FakeChannel``s; URLs without an http(s) scheme are rejected."""

    channels: list[FakeChannel] = field(default_factory=list[FakeChannel])

    def open(self, method: str, url: str) -> FakeChannel:
        if not url.startswith(("http://", "https://")) or " " in url:
            raise InvalidRequestUrl(url)
        channel = FakeChannel(method=method, url=url)
        self.channels.append(channel)
        return channel

    @property
    def last(self) -> FakeChannel:
        return self.channels[-1]


@dataclass
class Recorder[T]:
    """Collects dispatched actions in order."""

    actions: list[T] = field(default_factory=list["T"])

    def __call__(self, action: T) -> None:
        self.actions.append(action)
