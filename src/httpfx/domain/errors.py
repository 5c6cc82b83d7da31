"""Application-facing HTTP error values.

These are plain values carried inside ``Err``; nothing in the effect layer
raises them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never


@dataclass(frozen=True, slots=True)
class BadUrl:
    url: str


@dataclass(frozen=True, slots=True)
class Timeout:
    pass


@dataclass(frozen=True, slots=True)
class NetworkError:
    pass


@dataclass(frozen=True, slots=True)
class BadStatus:
    status_code: int


@dataclass(frozen=True, slots=True)
class BadBody:
    """A 2xx response whose payload failed to decode."""

    diagnostic: str


type HttpError = BadUrl | Timeout | NetworkError | BadStatus | BadBody


def describe_error(error: HttpError) -> str:
    match error:
        case BadUrl(url=url):
            return f"Bad URL: {url!r}"
        case Timeout():
            return "Request timed out"
        case NetworkError():
            return "Network error"
        case BadStatus(status_code=status_code):
            return f"Bad status: {status_code}"
        case BadBody(diagnostic=diagnostic):
            return f"Bad body: {diagnostic}"
        case _:
            assert_never(error)


__all__ = [
    "BadBody",
    "BadStatus",
    "BadUrl",
    "HttpError",
    "NetworkError",
    "Timeout",
    "describe_error",
]
