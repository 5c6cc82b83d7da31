"""Response expectations and the outcome resolver.

An ``Expect`` tells the transport how to read the response body (text or
binary) and turns the resulting ``TransportOutcome`` into an application
action. The ``expect_*`` builders cover the common cases; everything funnels
through ``resolve`` unless the caller asks for the raw ``*_response`` variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, assert_never

from pydantic import TypeAdapter, ValidationError

from .errors import BadBody, BadStatus, BadUrl, HttpError, NetworkError, Timeout
from .outcome import (
    BadStatusOutcome,
    BadUrlOutcome,
    GoodStatusOutcome,
    NetworkErrorOutcome,
    TimeoutOutcome,
    TransportOutcome,
)
from .result import Err, Ok, Result, map_error

if TYPE_CHECKING:
    from collections.abc import Callable


class ResponseMode(StrEnum):
    """How the transport should hand over the response body."""

    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True, slots=True)
class Expect[A]:
    mode: ResponseMode
    to_body: Callable[[str | bytes], Any]
    to_action: Callable[[TransportOutcome[Any]], A]


def _as_text(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def _as_bytes(raw: str | bytes) -> bytes:
    if isinstance(raw, str):
        return raw.encode("utf-8")
    return raw


def resolve[B, T](
    decode_body: Callable[[B], Result[str, T]],
) -> Callable[[TransportOutcome[B]], Result[HttpError, T]]:
    """Build a resolver mapping every transport outcome onto ``Result``.

    Non-2xx bodies are discarded; only the status code survives. A 2xx body is
    passed to ``decode_body`` and a decode failure keeps just its string form.
    """

    def _to_bad_body(diagnostic: str) -> HttpError:
        return BadBody(diagnostic=str(diagnostic))

    def resolver(outcome: TransportOutcome[B]) -> Result[HttpError, T]:
        match outcome:
            case BadUrlOutcome(url=url):
                return Err(BadUrl(url=url))
            case TimeoutOutcome():
                return Err(Timeout())
            case NetworkErrorOutcome():
                return Err(NetworkError())
            case BadStatusOutcome(metadata=metadata):
                return Err(BadStatus(status_code=metadata.status_code))
            case GoodStatusOutcome(body=body):
                return map_error(_to_bad_body, decode_body(body))
            case _:
                assert_never(outcome)

    return resolver


def expect_string_response[A, E, T](
    to_msg: Callable[[Result[E, T]], A],
    to_result: Callable[[TransportOutcome[str]], Result[E, T]],
) -> Expect[A]:
    """Expect a text body and interpret the raw outcome yourself.

    Use this when a non-2xx response body or its headers matter.
    """

    return Expect(
        mode=ResponseMode.TEXT,
        to_body=_as_text,
        to_action=lambda outcome: to_msg(to_result(outcome)),
    )


def expect_bytes_response[A, E, T](
    to_msg: Callable[[Result[E, T]], A],
    to_result: Callable[[TransportOutcome[bytes]], Result[E, T]],
) -> Expect[A]:
    return Expect(
        mode=ResponseMode.BINARY,
        to_body=_as_bytes,
        to_action=lambda outcome: to_msg(to_result(outcome)),
    )


def expect_string[A](to_msg: Callable[[Result[HttpError, str]], A]) -> Expect[A]:
    return expect_string_response(to_msg, resolve(Ok))


def expect_json[A, T](
    to_msg: Callable[[Result[HttpError, T]], A],
    target: type[T] | TypeAdapter[T],
) -> Expect[A]:
    """Expect a JSON body validated against ``target`` with pydantic.

    Malformed JSON and validation failures both end up as ``BadBody`` carrying
    pydantic's error text.
    """

    adapter: TypeAdapter[T] = target if isinstance(target, TypeAdapter) else TypeAdapter(target)

    def decode(text: str) -> Result[str, T]:
        try:
            return Ok(adapter.validate_json(text))
        except ValidationError as exc:
            return Err(str(exc))

    return expect_string_response(to_msg, resolve(decode))


def expect_bytes[A, T](
    to_msg: Callable[[Result[HttpError, T]], A],
    decoder: Callable[[bytes], T | None],
) -> Expect[A]:
    """Expect binary data; ``decoder`` returns ``None`` when it cannot parse."""

    def decode(data: bytes) -> Result[str, T]:
        value = decoder(data)
        if value is None:
            return Err("unexpected bytes")
        return Ok(value)

    return expect_bytes_response(to_msg, resolve(decode))


def expect_whatever[A](to_msg: Callable[[Result[HttpError, None]], A]) -> Expect[A]:
    """Ignore the body; only whether the request succeeded matters."""

    def ignore(_data: bytes) -> Result[str, None]:
        return Ok(None)

    return expect_bytes_response(to_msg, resolve(ignore))


def map_expect[A, B](func: Callable[[A], B], expect: Expect[A]) -> Expect[B]:
    inner = expect.to_action
    return Expect(
        mode=expect.mode,
        to_body=expect.to_body,
        to_action=lambda outcome: func(inner(outcome)),
    )


__all__ = [
    "Expect",
    "ResponseMode",
    "expect_bytes",
    "expect_bytes_response",
    "expect_json",
    "expect_string",
    "expect_string_response",
    "expect_whatever",
    "map_expect",
    "resolve",
]
