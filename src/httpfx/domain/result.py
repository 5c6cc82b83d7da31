"""Two-variant result container used to report outcomes without raising."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, assert_never

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E


type Result[E, T] = Err[E] | Ok[T]


def map_result[E, T, U](func: Callable[[T], U], result: Result[E, T]) -> Result[E, U]:
    match result:
        case Ok(value=value):
            return Ok(func(value))
        case Err():
            return result
        case _:
            assert_never(result)


def map_error[E, F, T](func: Callable[[E], F], result: Result[E, T]) -> Result[F, T]:
    """Transform the error side of ``result``, leaving successes untouched."""

    match result:
        case Ok():
            return result
        case Err(error=error):
            return Err(func(error))
        case _:
            assert_never(result)


def and_then[E, T, U](
    func: Callable[[T], Result[E, U]], result: Result[E, T]
) -> Result[E, U]:
    match result:
        case Ok(value=value):
            return func(value)
        case Err():
            return result
        case _:
            assert_never(result)


def with_default[E, T](default: T, result: Result[E, T]) -> T:
    match result:
        case Ok(value=value):
            return value
        case Err():
            return default
        case _:
            assert_never(result)


__all__ = ["Err", "Ok", "Result", "and_then", "map_error", "map_result", "with_default"]
