"""Transport port implemented on top of ``httpx.AsyncClient``.

Every ``send`` becomes an ``asyncio.Task`` on the running loop. The task
resolves exactly once through one of the terminal listeners (load, error,
timeout) unless it is aborted, in which case no listener fires at all.
Progress listeners may fire any number of times before that.

The transport holds every task until it finishes. Closing it interrupts the
tasks still running; those report an error.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from httpfx.config.transport import TransportConfig
from httpfx.domain.expect import ResponseMode
from httpfx.domain.ports import InvalidRequestUrl, RawResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable
    from types import TracebackType

log = getLogger(__name__)

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def _resolve_url(url: str, base_url: str | None) -> httpx.URL:
    try:
        target = httpx.URL(url)
        if base_url is not None and target.is_relative_url:
            target = httpx.URL(base_url).join(target)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidRequestUrl(url) from exc
    if target.scheme not in _ALLOWED_SCHEMES or not target.host:
        raise InvalidRequestUrl(url)
    return target


def _content_length(headers: httpx.Headers) -> int | None:
    value = headers.get("Content-Length")
    if value is None:
        return None
    try:
        length = int(value)
    except ValueError:
        return None
    return length if length >= 0 else None


def _raw_header_block(headers: httpx.Headers) -> str:
    return "\r\n".join(f"{name}: {value}" for name, value in headers.multi_items())


class HttpxChannel:
    """One request/response exchange driven by an ``HttpxTransport``."""

    def __init__(self, transport: HttpxTransport, method: str, url: httpx.URL) -> None:
        self._transport = transport
        self._method = method
        self._url = url
        self._headers: list[tuple[str, str]] = []
        self._timeout_ms = 0
        self._mode = ResponseMode.TEXT
        self._with_credentials = False
        self._error_listeners: list[Callable[[], None]] = []
        self._timeout_listeners: list[Callable[[], None]] = []
        self._load_listeners: list[Callable[[RawResponse], None]] = []
        self._upload_listeners: list[Callable[[int, int], None]] = []
        self._download_listeners: list[Callable[[int, int | None], None]] = []
        self._task: asyncio.Task[None] | None = None
        self._aborted = False

    @property
    def url(self) -> httpx.URL:
        return self._url

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    def set_header(self, name: str, value: str) -> None:
        self._headers.append((name, value))

    def set_timeout(self, timeout_ms: int) -> None:
        self._timeout_ms = max(timeout_ms, 0)

    def set_response_mode(self, mode: ResponseMode) -> None:
        self._mode = mode

    def set_credentials_policy(self, allow_cross_origin: bool) -> None:
        self._with_credentials = allow_cross_origin

    def on_error(self, listener: Callable[[], None]) -> None:
        self._error_listeners.append(listener)

    def on_timeout(self, listener: Callable[[], None]) -> None:
        self._timeout_listeners.append(listener)

    def on_load(self, listener: Callable[[RawResponse], None]) -> None:
        self._load_listeners.append(listener)

    def on_upload_progress(self, listener: Callable[[int, int], None]) -> None:
        self._upload_listeners.append(listener)

    def on_download_progress(self, listener: Callable[[int, int | None], None]) -> None:
        self._download_listeners.append(listener)

    def send(self, body: bytes | None) -> None:
        if self._task is not None:
            raise RuntimeError("Channel has already been sent")
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(body), name=f"httpfx {self._method} {self._url}")
        self._transport.keep(self._task)

    def abort(self) -> None:
        self._aborted = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _run(self, body: bytes | None) -> None:
        delay = self._timeout_ms / 1000 if self._timeout_ms > 0 else None
        try:
            async with asyncio.timeout(delay):
                raw = await self._exchange(body)
        except (TimeoutError, httpx.TimeoutException):
            log.warning("Request timed out: %s %s", self._method, self._url)
            self._fire(self._timeout_listeners)
        except httpx.RequestError as exc:
            log.warning("Request failed: %s %s (%s)", self._method, self._url, exc)
            self._fire(self._error_listeners)
        except asyncio.CancelledError:
            if not self._aborted:
                log.warning("Request interrupted: %s %s", self._method, self._url)
                self._fire(self._error_listeners)
            raise
        except Exception:
            log.exception("Request crashed: %s %s", self._method, self._url)
            self._fire(self._error_listeners)
        else:
            if self._aborted:
                return
            for listener in self._load_listeners:
                listener(raw)

    async def _exchange(self, body: bytes | None) -> RawResponse:
        config = self._transport.config
        client = self._transport.client

        headers = [*config.default_headers, *self._headers]
        content: bytes | AsyncIterator[bytes] | None = body
        if body and self._upload_listeners:
            headers.append(("Content-Length", str(len(body))))
            content = self._upload_stream(body, config.upload_chunk_size)
        elif self._upload_listeners:
            self._report_upload(0, 0)

        request = httpx.Request(self._method, self._url, headers=headers, content=content)
        if self._with_credentials:
            client.cookies.set_cookie_header(request)

        response = await client.send(
            request, stream=True, follow_redirects=config.follow_redirects
        )
        try:
            size = _content_length(response.headers)
            received = 0
            chunks: list[bytes] = []
            async for chunk in response.aiter_bytes():
                chunks.append(chunk)
                received += len(chunk)
                self._report_download(received, size)
            if not received:
                self._report_download(0, size)
        finally:
            await response.aclose()

        data = b"".join(chunks)
        payload: str | bytes = data
        if self._mode is ResponseMode.TEXT:
            payload = data.decode(response.encoding or "utf-8", errors="replace")

        return RawResponse(
            url=str(response.url),
            status_code=response.status_code,
            status_text=response.reason_phrase,
            raw_headers=_raw_header_block(response.headers),
            body=payload,
        )

    async def _upload_stream(self, body: bytes, chunk_size: int) -> AsyncIterator[bytes]:
        size = len(body)
        for offset in range(0, size, chunk_size):
            chunk = body[offset : offset + chunk_size]
            yield chunk
            self._report_upload(offset + len(chunk), size)

    def _report_upload(self, sent: int, size: int) -> None:
        if self._aborted:
            return
        for listener in self._upload_listeners:
            listener(sent, size)

    def _report_download(self, received: int, size: int | None) -> None:
        if self._aborted:
            return
        for listener in self._download_listeners:
            listener(received, size)

    def _fire(self, listeners: list[Callable[[], None]]) -> None:
        if self._aborted:
            return
        for listener in listeners:
            listener()


class HttpxTransport:
    """Open ``HttpxChannel``s sharing one ``httpx.AsyncClient``.

    A client passed in is borrowed and left open by ``aclose``; otherwise the
    transport creates and owns one.
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or TransportConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def keep(self, task: asyncio.Task[None]) -> None:
        """Hold ``task`` until it finishes; the event loop only keeps weak references."""

        self._tasks.add(task)
        task.add_done_callback(self._forget)

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("Listener failed for %s", task.get_name(), exc_info=exc)

    async def aclose(self) -> None:
        """Interrupt requests still in flight, then close an owned client.

        Interrupted requests report a network error to their listeners.
        """

        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            log.info("Interrupting %d request(s) on close", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)
        if self._owns_client:
            await self._client.aclose()

    def open(self, method: str, url: str) -> HttpxChannel:
        return HttpxChannel(self, method, _resolve_url(url, self.config.base_url))


__all__ = ["HttpxChannel", "HttpxTransport"]
