"""Upload/download progress values and fraction helpers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Sending:
    """Bytes of the request body handed to the transport so far."""

    sent: int
    size: int


@dataclass(frozen=True, slots=True)
class Receiving:
    """Bytes of the response body read so far.

    ``size`` is ``None`` when the server did not announce a length.
    """

    received: int
    size: int | None


type Progress = Sending | Receiving


def _clamp(low: float, high: float, value: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def fraction_sent(sent: int, size: int) -> float:
    """Return upload completion in ``[0, 1]``; an empty body counts as fully sent."""

    if size == 0:
        return 1.0
    return _clamp(0.0, 1.0, sent / size)


def fraction_received(received: int, size: int | None) -> float:
    """Return download completion in ``[0, 1]``; unknown sizes report ``0``."""

    if size is None:
        return 0.0
    if size == 0:
        return 1.0
    return _clamp(0.0, 1.0, received / size)


__all__ = ["Progress", "Receiving", "Sending", "fraction_received", "fraction_sent"]
