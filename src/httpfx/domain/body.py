"""Request body values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

from pydantic import TypeAdapter

JSON_MIME_TYPE: Final[str] = "application/json"

_ANY_ADAPTER: Final[TypeAdapter[Any]] = TypeAdapter(Any)


@dataclass(frozen=True, slots=True)
class Body:
    """Encoded request payload plus the MIME type sent as ``Content-Type``.

    An empty ``mime_type`` means no ``Content-Type`` header is added.
    """

    mime_type: str
    content: bytes


def empty_body() -> Body | None:
    return None


def string_body(mime_type: str, text: str) -> Body:
    return Body(mime_type=mime_type, content=text.encode("utf-8"))


def bytes_body(mime_type: str, data: bytes) -> Body:
    if not isinstance(data, bytes | bytearray | memoryview):
        msg = f"bytes_body expects bytes, got {type(data).__name__}"
        raise TypeError(msg)
    return Body(mime_type=mime_type, content=bytes(data))


def json_body(value: object) -> Body:
    """Serialise ``value`` (plain data, dataclasses or pydantic models) as JSON."""

    return Body(mime_type=JSON_MIME_TYPE, content=_ANY_ADAPTER.dump_json(value))


__all__ = ["JSON_MIME_TYPE", "Body", "bytes_body", "empty_body", "json_body", "string_body"]
