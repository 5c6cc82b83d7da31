from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, assert_never

from dotenv import load_dotenv

from httpfx.app import fetch_once
from httpfx.config import ConfigurationError, configure_logging, get_transport_config
from httpfx.domain import (
    Err,
    Ok,
    Receiving,
    Sending,
    describe_error,
    empty_body,
    expect_bytes,
    expect_string,
    fraction_received,
    fraction_sent,
    request,
    string_body,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from httpfx.domain import Header, HttpError, Progress, Request, Result

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send declarative HTTP requests")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log transport activity to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch = subparsers.add_parser("fetch", help="Send one request and print the response body")
    fetch.add_argument("url", help="Absolute URL, or relative to HTTPFX_BASE_URL")
    fetch.add_argument("--method", default="GET", help="HTTP method (default: %(default)s)")
    fetch.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="NAME:VALUE",
        help="Request header; repeat to send several, including repeated names",
    )
    fetch.add_argument("--data", help="Request body sent as text")
    fetch.add_argument(
        "--content-type",
        default="text/plain",
        help="MIME type of --data (default: %(default)s)",
    )
    fetch.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Abort after this many milliseconds (default: no timeout)",
    )
    fetch.add_argument(
        "--tracker",
        help="Tracker name for the request (progress reporting uses one implicitly)",
    )
    fetch.add_argument(
        "--binary",
        action="store_true",
        help="Write the raw response bytes to stdout",
    )
    fetch.add_argument(
        "--progress",
        action="store_true",
        help="Report upload/download progress on stderr",
    )
    return parser.parse_args(list(argv))


def _parse_header(value: str) -> Header:
    name, separator, header_value = value.partition(":")
    if not separator or not name.strip():
        raise ValueError(f"Invalid header {value!r}; expected NAME:VALUE")
    return (name.strip(), header_value.strip())


def _build_request(
    args: argparse.Namespace,
) -> Request[Result[HttpError, str]] | Request[Result[HttpError, bytes]]:
    headers = [_parse_header(value) for value in args.header]
    if args.timeout_ms is not None and args.timeout_ms < 0:
        raise ValueError("Timeout must be non-negative")
    body = string_body(args.content_type, args.data) if args.data is not None else empty_body()
    if args.binary:
        return request(
            method=args.method,
            url=args.url,
            headers=headers,
            body=body,
            expect=expect_bytes(_identity, _identity),
            timeout_ms=args.timeout_ms,
            tracker=args.tracker,
        )
    return request(
        method=args.method,
        url=args.url,
        headers=headers,
        body=body,
        expect=expect_string(_identity),
        timeout_ms=args.timeout_ms,
        tracker=args.tracker,
    )


def _identity[T](value: T) -> T:
    return value


def _print_progress(progress: Progress) -> None:
    match progress:
        case Sending(sent=sent, size=size):
            print(f"sent {sent}/{size} bytes ({fraction_sent(sent, size):.0%})", file=sys.stderr)
        case Receiving(received=received, size=size):
            total = "?" if size is None else str(size)
            fraction = fraction_received(received, size)
            print(f"received {received}/{total} bytes ({fraction:.0%})", file=sys.stderr)
        case _:
            assert_never(progress)


def _write_body(value: str | bytes) -> None:
    if isinstance(value, bytes):
        sys.stdout.buffer.write(value)
        sys.stdout.buffer.flush()
        return
    print(value)


def main(argv: Sequence[str] | None = None) -> None:
    """Command line entry point."""
    try:
        parsed_args = _parse_args(argv if argv is not None else sys.argv[1:])
        command = _build_request(parsed_args)
        config = get_transport_config()
    except (ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.WARNING)
    on_progress = _print_progress if parsed_args.progress else None

    try:
        result = fetch_once(command, config=config, on_progress=on_progress)
    except Exception as e:  # noqa: BLE001
        log.debug("Fetch crashed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    match result:
        case Ok(value=value):
            _write_body(value)
        case Err(error=error):
            print(f"Error: {describe_error(error)}", file=sys.stderr)
            sys.exit(1)
        case _:
            assert_never(result)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)", file=sys.stderr)
    sys.exit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
