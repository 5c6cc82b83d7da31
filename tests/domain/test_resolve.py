from __future__ import annotations

from typing import Any

import pytest
from pydantic import BaseModel, TypeAdapter

from httpfx.domain.errors import BadBody, BadStatus, BadUrl, NetworkError, Timeout
from httpfx.domain.expect import (
    ResponseMode,
    expect_bytes,
    expect_bytes_response,
    expect_json,
    expect_string,
    expect_string_response,
    expect_whatever,
    map_expect,
    resolve,
)
from httpfx.domain.outcome import (
    BadStatusOutcome,
    BadUrlOutcome,
    GoodStatusOutcome,
    Metadata,
    NetworkErrorOutcome,
    TimeoutOutcome,
    TransportOutcome,
)
from httpfx.domain.result import Err, Ok, Result


class Book(BaseModel):
    title: str
    pages: int


def _metadata(status_code: int = 200) -> Metadata:
    return Metadata(
        url="https://example.test/books",
        status_code=status_code,
        status_text="",
        headers={"content-type": "application/json"},
    )


def _good(body: Any) -> GoodStatusOutcome[Any]:
    return GoodStatusOutcome(metadata=_metadata(), body=body)


def _always_fails(_body: str) -> Result[str, str]:
    return Err("cannot decode")


@pytest.mark.parametrize(
    ("outcome", "expected"),
    [
        (BadUrlOutcome(url="nope"), Err(BadUrl(url="nope"))),
        (TimeoutOutcome(), Err(Timeout())),
        (NetworkErrorOutcome(), Err(NetworkError())),
    ],
)
def test_resolve_maps_transport_failures(
    outcome: TransportOutcome[str], expected: Result[Any, str]
) -> None:
    assert resolve(Ok)(outcome) == expected


@pytest.mark.parametrize("decoder", [Ok, _always_fails])
def test_resolve_bad_status_ignores_decoder(decoder: Any) -> None:
    outcome = BadStatusOutcome(metadata=_metadata(404), body="missing")

    assert resolve(decoder)(outcome) == Err(BadStatus(status_code=404))


def test_resolve_good_status_runs_decoder() -> None:
    assert resolve(Ok)(_good("hello")) == Ok("hello")


def test_resolve_good_status_decode_failure_becomes_bad_body() -> None:
    assert resolve(_always_fails)(_good("hello")) == Err(BadBody(diagnostic="cannot decode"))


def test_expect_string_reads_text_and_wraps_result() -> None:
    expect = expect_string(lambda result: ("got", result))

    assert expect.mode is ResponseMode.TEXT
    assert expect.to_body(b"caf\xc3\xa9") == "café"
    assert expect.to_action(_good("body")) == ("got", Ok("body"))


def test_expect_json_validates_with_pydantic() -> None:
    expect = expect_json(lambda result: result, Book)

    assert expect.to_action(_good('{"title": "Dune", "pages": 412}')) == Ok(
        Book(title="Dune", pages=412)
    )


def test_expect_json_accepts_type_adapter() -> None:
    expect = expect_json(lambda result: result, TypeAdapter(list[int]))

    assert expect.to_action(_good("[1, 2, 3]")) == Ok([1, 2, 3])


def test_expect_json_reports_invalid_payload_as_bad_body() -> None:
    expect = expect_json(lambda result: result, Book)

    result = expect.to_action(_good('{"title": "Dune"}'))

    assert isinstance(result, Err)
    assert isinstance(result.error, BadBody)
    assert "pages" in result.error.diagnostic


def test_expect_json_reports_malformed_json_as_bad_body() -> None:
    expect = expect_json(lambda result: result, Book)

    result = expect.to_action(_good("{not json"))

    assert isinstance(result, Err)
    assert isinstance(result.error, BadBody)


def test_expect_bytes_uses_decoder_and_binary_mode() -> None:
    expect = expect_bytes(lambda result: result, lambda data: data[:2] or None)

    assert expect.mode is ResponseMode.BINARY
    assert expect.to_body("ab") == b"ab"
    assert expect.to_action(_good(b"xyz")) == Ok(b"xy")
    assert expect.to_action(_good(b"")) == Err(BadBody(diagnostic="unexpected bytes"))


def test_expect_whatever_ignores_body() -> None:
    expect = expect_whatever(lambda result: result)

    assert expect.to_action(_good(b"\x00\x01")) == Ok(None)
    assert expect.to_action(TimeoutOutcome()) == Err(Timeout())


def test_raw_response_expectations_expose_metadata_and_body() -> None:
    def keep_error_body(outcome: TransportOutcome[str]) -> Result[tuple[int, str], str]:
        match outcome:
            case BadStatusOutcome(metadata=metadata, body=body):
                return Err((metadata.status_code, body))
            case GoodStatusOutcome(body=body):
                return Ok(body)
            case _:
                return Err((0, ""))

    text_expect = expect_string_response(lambda result: result, keep_error_body)
    outcome = BadStatusOutcome(metadata=_metadata(422), body='{"error": "title"}')

    assert text_expect.to_action(outcome) == Err((422, '{"error": "title"}'))

    bytes_expect = expect_bytes_response(lambda result: result, lambda _outcome: Ok(b"raw"))
    assert bytes_expect.mode is ResponseMode.BINARY


def test_map_expect_composes_action_mapping() -> None:
    expect = map_expect(lambda action: ("wrapped", action), expect_string(lambda r: r))

    assert expect.mode is ResponseMode.TEXT
    assert expect.to_action(_good("x")) == ("wrapped", Ok("x"))
