"""Declarative commands and subscriptions understood by the effect manager."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, assert_never

from .body import empty_body
from .expect import map_expect

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .body import Body
    from .expect import Expect
    from .progress import Progress

type Header = tuple[str, str]


def header(name: str, value: str) -> Header:
    return (name, value)


@dataclass(frozen=True, slots=True)
class Cancel:
    """Abort the live request registered under ``tracker``, if any."""

    tracker: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Request[A]:
    """Declare that a request should be in flight.

    ``headers`` keeps declaration order and duplicates; each pair is sent as
    its own header line. ``timeout_ms`` of ``None`` or ``0`` disables the
    timeout. Only requests with a ``tracker`` can be cancelled or report
    progress.
    """

    method: str
    headers: tuple[Header, ...]
    url: str
    body: Body | None
    expect: Expect[A]
    timeout_ms: int | None = None
    tracker: str | None = None
    allow_cross_origin_credentials: bool = False


type Command[A] = Cancel | Request[A]


@dataclass(frozen=True, slots=True)
class Track[A]:
    """Subscription to progress of the request tagged with ``tracker``."""

    tracker: str
    on_progress: Callable[[Progress], A]


def request[A](
    *,
    method: str,
    url: str,
    expect: Expect[A],
    headers: Iterable[Header] = (),
    body: Body | None = None,
    timeout_ms: int | None = None,
    tracker: str | None = None,
    allow_cross_origin_credentials: bool = False,
) -> Request[A]:
    return Request(
        method=method,
        headers=tuple(headers),
        url=url,
        body=body,
        expect=expect,
        timeout_ms=timeout_ms,
        tracker=tracker,
        allow_cross_origin_credentials=allow_cross_origin_credentials,
    )


def get[A](url: str, expect: Expect[A]) -> Request[A]:
    return request(method="GET", url=url, expect=expect, body=empty_body())


def post[A](url: str, body: Body | None, expect: Expect[A]) -> Request[A]:
    return request(method="POST", url=url, expect=expect, body=body)


def cancel(tracker: str) -> Cancel:
    return Cancel(tracker=tracker)


def track[A](tracker: str, on_progress: Callable[[Progress], A]) -> Track[A]:
    return Track(tracker=tracker, on_progress=on_progress)


def map_cmd[A, B](func: Callable[[A], B], command: Command[A]) -> Command[B]:
    match command:
        case Cancel():
            return command
        case Request():
            return replace(command, expect=map_expect(func, command.expect))  # type: ignore[return-value]
        case _:
            assert_never(command)


def map_sub[A, B](func: Callable[[A], B], subscription: Track[A]) -> Track[B]:
    inner = subscription.on_progress
    return Track(tracker=subscription.tracker, on_progress=lambda progress: func(inner(progress)))


__all__ = [
    "Cancel",
    "Command",
    "Header",
    "Request",
    "Track",
    "cancel",
    "get",
    "header",
    "map_cmd",
    "map_sub",
    "post",
    "request",
    "track",
]
