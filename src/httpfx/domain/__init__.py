"""Value types shared by the effect layer, adapters and applications."""

from __future__ import annotations

from .body import JSON_MIME_TYPE, Body, bytes_body, empty_body, json_body, string_body
from .commands import (
    Cancel,
    Command,
    Header,
    Request,
    Track,
    cancel,
    get,
    header,
    map_cmd,
    map_sub,
    post,
    request,
    track,
)
from .errors import (
    BadBody,
    BadStatus,
    BadUrl,
    HttpError,
    NetworkError,
    Timeout,
    describe_error,
)
from .expect import (
    Expect,
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
from .outcome import (
    BadStatusOutcome,
    BadUrlOutcome,
    GoodStatusOutcome,
    Metadata,
    NetworkErrorOutcome,
    TimeoutOutcome,
    TransportOutcome,
    parse_raw_headers,
)
from .progress import Progress, Receiving, Sending, fraction_received, fraction_sent
from .result import Err, Ok, Result, and_then, map_error, map_result, with_default

__all__ = [
    "JSON_MIME_TYPE",
    "BadBody",
    "BadStatus",
    "BadStatusOutcome",
    "BadUrl",
    "BadUrlOutcome",
    "Body",
    "Cancel",
    "Command",
    "Err",
    "Expect",
    "GoodStatusOutcome",
    "Header",
    "HttpError",
    "Metadata",
    "NetworkError",
    "NetworkErrorOutcome",
    "Ok",
    "Progress",
    "Receiving",
    "Request",
    "ResponseMode",
    "Result",
    "Sending",
    "Timeout",
    "TimeoutOutcome",
    "Track",
    "TransportOutcome",
    "and_then",
    "bytes_body",
    "cancel",
    "describe_error",
    "empty_body",
    "expect_bytes",
    "expect_bytes_response",
    "expect_json",
    "expect_string",
    "expect_string_response",
    "expect_whatever",
    "fraction_received",
    "fraction_sent",
    "get",
    "header",
    "json_body",
    "map_cmd",
    "map_error",
    "map_expect",
    "map_result",
    "map_sub",
    "parse_raw_headers",
    "post",
    "request",
    "resolve",
    "string_body",
    "track",
    "with_default",
]
