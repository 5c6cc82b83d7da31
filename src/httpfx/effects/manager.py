"""The HTTP effect manager.

Hosts call ``on_effects`` once per cycle with the commands and subscriptions
the application currently declares, and ``on_self_action`` for every action
the manager dispatched to itself. Both return the next state; the host keeps
it and must not run two calls concurrently on the same state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final, assert_never

from .actions import Finished, ProgressReport
from .reconciler import LiveTable, forget_finished, reconcile
from .router import route_progress

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from httpfx.domain.commands import Command, Track
    from httpfx.domain.ports import Transport

    from .actions import SelfAction

HOME: Final[str] = "http"

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManagerState[A]:
    live: LiveTable = field(default_factory=dict[str, "Callable[[], None]"])
    subscriptions: tuple[Track[A], ...] = ()


@dataclass(slots=True)
class HttpEffectManager[A]:
    transport: Transport
    home: str = HOME

    def init(self) -> ManagerState[A]:
        return ManagerState()

    def on_effects(
        self,
        dispatch_app: Callable[[A], None],
        dispatch_self: Callable[[SelfAction], None],
        commands: Sequence[Command[A]],
        subscriptions: Iterable[Track[A]],
        state: ManagerState[A],
    ) -> ManagerState[A]:
        live = reconcile(
            commands,
            state.live,
            dispatch_app=dispatch_app,
            dispatch_self=dispatch_self,
            transport=self.transport,
        )
        subs = tuple(subscriptions)
        if live is state.live and subs == state.subscriptions:
            return state
        return ManagerState(live=live, subscriptions=subs)

    def on_self_action(
        self,
        dispatch_app: Callable[[A], None],
        dispatch_self: Callable[[SelfAction], None],  # noqa: ARG002
        action: SelfAction,
        state: ManagerState[A],
    ) -> ManagerState[A]:
        match action:
            case ProgressReport():
                if not route_progress(action, state.subscriptions, dispatch_app):
                    log.debug("Dropped progress for unsubscribed tracker %r", action.tracker)
                return state
            case Finished(tracker=tracker, handle=handle):
                live = forget_finished(state.live, tracker, handle)
                if live is state.live:
                    return state
                return ManagerState(live=live, subscriptions=state.subscriptions)
            case _:
                assert_never(action)


__all__ = ["HOME", "HttpEffectManager", "ManagerState"]
