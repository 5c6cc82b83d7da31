"""Self actions the effect manager routes back to itself."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from httpfx.domain.progress import Progress


@dataclass(frozen=True, slots=True)
class ProgressReport:
    tracker: str
    progress: Progress


@dataclass(frozen=True, slots=True)
class Finished:
    """A tracked operation reached its terminal event.

    ``handle`` identifies the operation so a newer request that reused the
    tracker keeps its live entry.
    """

    tracker: str
    handle: Callable[[], None]


type SelfAction = ProgressReport | Finished

__all__ = ["Finished", "ProgressReport", "SelfAction"]
