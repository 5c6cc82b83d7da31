"""Diff declared commands against the table of live operations.

The live table maps a tracker to the cancel handle of the one operation
currently registered under it. ``reconcile`` never mutates the table it is
given: it returns the same object when there is nothing to do and a fresh
mapping otherwise.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, assert_never

from httpfx.domain.commands import Cancel, Request

from .launcher import launch

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from httpfx.domain.commands import Command
    from httpfx.domain.ports import Transport

    from .actions import SelfAction

type LiveTable = Mapping[str, Callable[[], None]]

log = getLogger(__name__)


def reconcile[A](
    commands: Sequence[Command[A]],
    live: LiveTable,
    *,
    dispatch_app: Callable[[A], None],
    dispatch_self: Callable[[SelfAction], None],
    transport: Transport,
) -> LiveTable:
    """Apply ``commands`` in order and return the resulting live table.

    A ``Request`` whose tracker already has a live entry replaces the entry
    without cancelling the older operation; that one runs to completion on
    its own.
    """

    if not commands:
        return live

    updated: dict[str, Callable[[], None]] = dict(live)
    for command in commands:
        match command:
            case Cancel(tracker=tracker):
                abort = updated.get(tracker)
                if abort is None:
                    continue
                log.debug("Cancelling live request for tracker %r", tracker)
                abort()
                del updated[tracker]
            case Request():
                handle = launch(
                    command,
                    dispatch_app=dispatch_app,
                    dispatch_self=dispatch_self,
                    transport=transport,
                )
                tracker = command.tracker
                if tracker is None or handle is None:
                    continue
                if tracker in updated:
                    log.debug("Tracker %r re-declared; previous request keeps running", tracker)
                updated[tracker] = handle
            case _:
                assert_never(command)
    return updated


def forget_finished(live: LiveTable, tracker: str, handle: Callable[[], None]) -> LiveTable:
    """Drop ``tracker`` if it still points at ``handle``."""

    if live.get(tracker) is not handle:
        return live
    updated = dict(live)
    del updated[tracker]
    return updated


__all__ = ["LiveTable", "forget_finished", "reconcile"]
