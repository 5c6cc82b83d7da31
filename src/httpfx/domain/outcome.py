"""Raw transport outcomes, before an ``Expect`` interprets them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

_HEADER_SEPARATOR = ": "
_LINE_SEPARATOR = "\r\n"
_VALUE_JOINER = ", "


@dataclass(frozen=True, slots=True, kw_only=True)
class Metadata:
    """Response line and headers as seen after redirects were followed."""

    url: str
    status_code: int
    status_text: str
    headers: Mapping[str, str] = field(default_factory=dict[str, str])


@dataclass(frozen=True, slots=True)
class BadUrlOutcome:
    url: str


@dataclass(frozen=True, slots=True)
class TimeoutOutcome:
    pass


@dataclass(frozen=True, slots=True)
class NetworkErrorOutcome:
    pass


@dataclass(frozen=True, slots=True)
class BadStatusOutcome[B]:
    metadata: Metadata
    body: B


@dataclass(frozen=True, slots=True)
class GoodStatusOutcome[B]:
    metadata: Metadata
    body: B


type TransportOutcome[B] = (
    BadUrlOutcome
    | TimeoutOutcome
    | NetworkErrorOutcome
    | BadStatusOutcome[B]
    | GoodStatusOutcome[B]
)


def is_good_status(status_code: int) -> bool:
    return 200 <= status_code <= 299


def classify_response[B](metadata: Metadata, body: B) -> TransportOutcome[B]:
    if is_good_status(metadata.status_code):
        return GoodStatusOutcome(metadata=metadata, body=body)
    return BadStatusOutcome(metadata=metadata, body=body)


def parse_raw_headers(raw_headers: str) -> dict[str, str]:
    """Parse a CRLF separated header block into a name -> value mapping.

    Lines are split on the first ``": "``; lines without it (or with an empty
    name) are dropped. Repeated names are merged with ``", "`` keeping arrival
    order: the block is walked from the last line up and each earlier value is
    prepended to the one already stored.
    """

    headers: dict[str, str] = {}
    if not raw_headers:
        return headers

    for line in reversed(raw_headers.split(_LINE_SEPARATOR)):
        index = line.find(_HEADER_SEPARATOR)
        if index <= 0:
            continue
        name = line[:index]
        value = line[index + len(_HEADER_SEPARATOR) :]
        existing = headers.get(name)
        headers[name] = value if existing is None else f"{value}{_VALUE_JOINER}{existing}"
    return headers


__all__ = [
    "BadStatusOutcome",
    "BadUrlOutcome",
    "GoodStatusOutcome",
    "Metadata",
    "NetworkErrorOutcome",
    "TimeoutOutcome",
    "TransportOutcome",
    "classify_response",
    "is_good_status",
    "parse_raw_headers",
]
