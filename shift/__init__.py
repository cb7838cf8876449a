"""
Shift: modules that talk to each other only through routed events.

Modules declare a ``router`` (pattern -> action tree), a ``controller``
(action -> payload transform) and a ``view`` (action -> consumer). The
event bus matches triggered events against every router and dispatches
the matching actions.
"""

from shift.app import Shift
from shift.bootstrap import BootstrapResult, bootstrap
from shift.bus import EventBus
from shift.config import ShiftConfig
from shift.errors import (
    BootstrapFailure,
    DispatchFailure,
    EternalDispatchLoop,
    NamespaceUndefined,
    SchedulerUnavailable,
    ShiftError,
    UnrecognizedMode,
    UnrecognizedRouteTargetKind,
)
from shift.modules import ModuleRecord, ModuleSet
from shift.registry import Mode, ServiceRegistry
from shift.routing import ResolvedRoute, matches, resolve

__version__ = "0.1.0"

__all__ = [
    "BootstrapFailure",
    "BootstrapResult",
    "DispatchFailure",
    "EternalDispatchLoop",
    "EventBus",
    "Mode",
    "ModuleRecord",
    "ModuleSet",
    "NamespaceUndefined",
    "ResolvedRoute",
    "SchedulerUnavailable",
    "ServiceRegistry",
    "Shift",
    "ShiftConfig",
    "ShiftError",
    "UnrecognizedMode",
    "UnrecognizedRouteTargetKind",
    "bootstrap",
    "matches",
    "resolve",
]
