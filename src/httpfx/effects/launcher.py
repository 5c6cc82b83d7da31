"""Start one transport operation per ``Request`` command."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from httpfx.domain.outcome import (
    BadUrlOutcome,
    Metadata,
    NetworkErrorOutcome,
    TimeoutOutcome,
    TransportOutcome,
    classify_response,
    parse_raw_headers,
)
from httpfx.domain.ports import InvalidRequestUrl
from httpfx.domain.progress import Receiving, Sending

from .actions import Finished, ProgressReport

if TYPE_CHECKING:
    from collections.abc import Callable

    from httpfx.domain.commands import Request
    from httpfx.domain.expect import Expect
    from httpfx.domain.ports import Channel, RawResponse, Transport

    from .actions import SelfAction

log = getLogger(__name__)


class CancelHandle:
    """Abort capability for a tracked operation.

    Once called, the operation stops reporting progress and never delivers its
    terminal action, even if the transport already finished.
    """

    __slots__ = ("_channel", "aborted")

    def __init__(self, channel: Channel) -> None:
        self._channel = channel
        self.aborted = False

    def __call__(self) -> None:
        self.aborted = True
        self._channel.abort()

    def __repr__(self) -> str:
        return f"CancelHandle(aborted={self.aborted})"


def to_outcome(expect: Expect[Any], raw: RawResponse) -> TransportOutcome[Any]:
    metadata = Metadata(
        url=raw.url,
        status_code=raw.status_code,
        status_text=raw.status_text,
        headers=parse_raw_headers(raw.raw_headers),
    )
    return classify_response(metadata, expect.to_body(raw.body))


def launch[A](
    command: Request[A],
    *,
    dispatch_app: Callable[[A], None],
    dispatch_self: Callable[[SelfAction], None],
    transport: Transport,
) -> CancelHandle | None:
    """Open, configure and send ``command`` on ``transport``.

    Returns a cancel handle for tracked requests and ``None`` otherwise. A URL
    rejected by the transport is reported as ``BadUrl`` before returning.
    """

    expect = command.expect
    tracker = command.tracker
    handle: CancelHandle | None = None
    delivered = False

    def done(outcome: TransportOutcome[Any]) -> None:
        nonlocal delivered
        if delivered or (handle is not None and handle.aborted):
            return
        delivered = True
        dispatch_app(expect.to_action(outcome))
        if tracker is not None and handle is not None:
            dispatch_self(Finished(tracker=tracker, handle=handle))

    try:
        channel = transport.open(command.method, command.url)
    except InvalidRequestUrl:
        log.info("Rejected request with bad URL: %s %r", command.method, command.url)
        done(BadUrlOutcome(url=command.url))
        return None

    channel.on_error(lambda: done(NetworkErrorOutcome()))
    channel.on_timeout(lambda: done(TimeoutOutcome()))
    channel.on_load(lambda raw: done(to_outcome(expect, raw)))

    if tracker is not None:
        handle = CancelHandle(channel)
        _track(channel, handle, tracker, dispatch_self)

    _configure(channel, command)

    body = command.body
    if body is not None and body.mime_type:
        channel.set_header("Content-Type", body.mime_type)
    channel.send(body.content if body is not None else None)

    return handle


def _configure(channel: Channel, command: Request[Any]) -> None:
    for name, value in command.headers:
        channel.set_header(name, value)
    channel.set_timeout(command.timeout_ms or 0)
    channel.set_response_mode(command.expect.mode)
    channel.set_credentials_policy(command.allow_cross_origin_credentials)


def _track(
    channel: Channel,
    handle: CancelHandle,
    tracker: str,
    dispatch_self: Callable[[SelfAction], None],
) -> None:
    def on_upload(sent: int, size: int) -> None:
        if handle.aborted:
            return
        dispatch_self(ProgressReport(tracker=tracker, progress=Sending(sent=sent, size=size)))

    def on_download(received: int, size: int | None) -> None:
        if handle.aborted:
            return
        dispatch_self(
            ProgressReport(tracker=tracker, progress=Receiving(received=received, size=size))
        )

    channel.on_upload_progress(on_upload)
    channel.on_download_progress(on_download)


__all__ = ["CancelHandle", "launch", "to_outcome"]
