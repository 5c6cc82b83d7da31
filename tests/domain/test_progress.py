from __future__ import annotations

import pytest

from httpfx.domain.progress import fraction_received, fraction_sent


@pytest.mark.parametrize("size", [1, 7, 1024, 10**9])
def test_fraction_sent_complete_when_everything_sent(size: int) -> None:
    assert fraction_sent(size, size) == 1


def test_fraction_sent_treats_empty_body_as_complete() -> None:
    assert fraction_sent(0, 0) == 1


def test_fraction_sent_clamps_overshoot() -> None:
    assert fraction_sent(150, 100) == 1


def test_fraction_sent_midway() -> None:
    assert fraction_sent(25, 100) == pytest.approx(0.25)


@pytest.mark.parametrize("received", [0, 1, 512, 10**6])
def test_fraction_received_unknown_size_is_zero(received: int) -> None:
    assert fraction_received(received, None) == 0


def test_fraction_received_zero_size_is_complete() -> None:
    assert fraction_received(0, 0) == 1


def test_fraction_received_clamps_overshoot() -> None:
    # content decoding can yield more bytes than Content-Length announced
    assert fraction_received(300, 100) == 1


@pytest.mark.parametrize(
    ("done", "size"),
    [(0, 1), (1, 3), (2, 3), (5, 5), (9, 4), (0, 10**9)],
)
def test_fractions_stay_within_unit_interval(done: int, size: int) -> None:
    for fraction in (fraction_sent(done, size), fraction_received(done, size)):
        assert 0 <= fraction <= 1
