"""Reconciliation core: launcher, reconciler, progress router and manager."""

from __future__ import annotations

from .actions import Finished, ProgressReport, SelfAction
from .launcher import CancelHandle, launch
from .manager import HOME, HttpEffectManager, ManagerState
from .reconciler import LiveTable, forget_finished, reconcile
from .router import route_progress

__all__ = [
    "HOME",
    "CancelHandle",
    "Finished",
    "HttpEffectManager",
    "LiveTable",
    "ManagerState",
    "ProgressReport",
    "SelfAction",
    "forget_finished",
    "launch",
    "reconcile",
    "route_progress",
]
