"""Application orchestration entry points.

``EffectLoop`` is a minimal host for ``HttpEffectManager``: it keeps the
manager state between cycles and queues self actions raised while a cycle is
running so that no two state transitions overlap.
"""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING, Final

from httpfx.adapters.httpx_transport import HttpxTransport
from httpfx.domain.commands import cancel, map_cmd, track
from httpfx.effects.manager import HttpEffectManager

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from httpfx.config.transport import TransportConfig
    from httpfx.domain.commands import Command, Request, Track
    from httpfx.domain.ports import Transport
    from httpfx.domain.progress import Progress
    from httpfx.effects.actions import SelfAction
    from httpfx.effects.manager import ManagerState

FETCH_TRACKER: Final[str] = "httpfx-fetch"

log = getLogger(__name__)


class EffectLoop[A]:
    """Serialise manager cycles and feed application actions to ``on_action``."""

    def __init__(self, manager: HttpEffectManager[A], *, on_action: Callable[[A], None]) -> None:
        self._manager = manager
        self._on_action = on_action
        self._state: ManagerState[A] = manager.init()
        self._pending: deque[SelfAction] = deque()
        self._busy = False

    @property
    def state(self) -> ManagerState[A]:
        return self._state

    def run_cycle(
        self,
        commands: Sequence[Command[A]],
        subscriptions: Iterable[Track[A]] = (),
    ) -> None:
        if self._busy:
            raise RuntimeError("EffectLoop cycles must not be nested")
        self._busy = True
        try:
            self._state = self._manager.on_effects(
                self._on_action,
                self.dispatch_self,
                commands,
                subscriptions,
                self._state,
            )
        finally:
            self._busy = False
        self._drain()

    def dispatch_self(self, action: SelfAction) -> None:
        self._pending.append(action)
        if not self._busy:
            self._drain()

    def _drain(self) -> None:
        self._busy = True
        try:
            while self._pending:
                action = self._pending.popleft()
                self._state = self._manager.on_self_action(
                    self._on_action,
                    self.dispatch_self,
                    action,
                    self._state,
                )
        finally:
            self._busy = False


@dataclass(frozen=True, slots=True)
class _Completed[A]:
    value: A


@dataclass(frozen=True, slots=True)
class _ProgressSeen:
    progress: Progress


async def run_request[A](
    command: Request[A],
    *,
    transport: Transport,
    on_progress: Callable[[Progress], None] | None = None,
) -> A:
    """Declare ``command`` once and wait for the action its response produces."""

    loop = asyncio.get_running_loop()
    completed: asyncio.Future[A] = loop.create_future()

    def on_action(action: _Completed[A] | _ProgressSeen) -> None:
        match action:
            case _Completed(value=value):
                if not completed.done():
                    completed.set_result(value)
            case _ProgressSeen(progress=progress):
                if on_progress is not None:
                    on_progress(progress)

    effect_loop: EffectLoop[_Completed[A] | _ProgressSeen] = EffectLoop(
        HttpEffectManager(transport=transport),
        on_action=on_action,
    )

    subscriptions: list[Track[_Completed[A] | _ProgressSeen]] = []
    tracker = command.tracker
    if on_progress is not None:
        if tracker is None:
            tracker = FETCH_TRACKER
            command = replace(command, tracker=tracker)
        subscriptions.append(track(tracker, _ProgressSeen))

    effect_loop.run_cycle([map_cmd(_Completed, command)], subscriptions)
    try:
        return await completed
    except asyncio.CancelledError:
        if tracker is not None:
            effect_loop.run_cycle([cancel(tracker)])
        raise


def fetch_once[A](
    command: Request[A],
    *,
    config: TransportConfig | None = None,
    on_progress: Callable[[Progress], None] | None = None,
) -> A:
    """Run ``command`` on a fresh httpx transport and return its action."""

    async def runner() -> A:
        async with HttpxTransport(config) as transport:
            return await run_request(command, transport=transport, on_progress=on_progress)

    log.info("Fetching %s %s", command.method, command.url)
    return asyncio.run(runner())


__all__ = ["FETCH_TRACKER", "EffectLoop", "fetch_once", "run_request"]
