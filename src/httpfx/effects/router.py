"""Forward progress reports to the subscriptions declared this cycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from httpfx.domain.commands import Track

    from .actions import ProgressReport


def route_progress[A](
    report: ProgressReport,
    subscriptions: Iterable[Track[A]],
    dispatch_app: Callable[[A], None],
) -> int:
    """Dispatch ``report`` to every subscription on its tracker.

    Returns the number of subscribers notified; ``0`` means the report was
    dropped because nobody listens to that tracker anymore.
    """

    delivered = 0
    for subscription in subscriptions:
        if subscription.tracker != report.tracker:
            continue
        dispatch_app(subscription.on_progress(report.progress))
        delivered += 1
    return delivered


__all__ = ["route_progress"]
