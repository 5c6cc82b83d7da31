"""Declarative HTTP effects.

Applications declare the requests that should be in flight; the effect manager
reconciles that declaration with the operations actually running, cancels what
disappeared and routes responses and progress back as application actions.
"""

from __future__ import annotations

from importlib import metadata

from .domain import (
    BadBody,
    BadStatus,
    BadUrl,
    Body,
    Cancel,
    Command,
    Err,
    Expect,
    HttpError,
    NetworkError,
    Ok,
    Progress,
    Receiving,
    Request,
    Result,
    Sending,
    Timeout,
    Track,
    bytes_body,
    cancel,
    empty_body,
    expect_bytes,
    expect_bytes_response,
    expect_json,
    expect_string,
    expect_string_response,
    expect_whatever,
    fraction_received,
    fraction_sent,
    get,
    header,
    json_body,
    post,
    request,
    string_body,
    track,
)
from .effects import HttpEffectManager, ManagerState, reconcile

try:
    __version__ = metadata.version("httpfx")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "BadBody",
    "BadStatus",
    "BadUrl",
    "Body",
    "Cancel",
    "Command",
    "Err",
    "Expect",
    "HttpEffectManager",
    "HttpError",
    "ManagerState",
    "NetworkError",
    "Ok",
    "Progress",
    "Receiving",
    "Request",
    "Result",
    "Sending",
    "Timeout",
    "Track",
    "__version__",
    "bytes_body",
    "cancel",
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
    "post",
    "reconcile",
    "request",
    "string_body",
    "track",
]
