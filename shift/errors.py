"""
Exceptions and diagnostic records for Shift.

Configuration and programmer errors are exceptions raised synchronously.
Handler failures never escape as exceptions; they are captured into
``DispatchFailure`` / ``BootstrapFailure`` records and delivered as the
payload of the reserved ``error.*`` events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ShiftError(Exception):
    """Base class for all Shift exceptions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NamespaceUndefined(ShiftError, KeyError):
    """Raised when the registry has nothing under a namespace."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"Namespace undefined: {namespace!r}")

    def __str__(self) -> str:
        return self.message


class UnrecognizedMode(ShiftError, ValueError):
    """Raised when a registry entry holds a mode the registry does not know."""

    def __init__(self, namespace: str, mode: Any):
        self.namespace = namespace
        self.mode = mode
        super().__init__(f"Unrecognized mode {mode!r} for namespace {namespace!r}")


class UnrecognizedRouteTargetKind(ShiftError, TypeError):
    """Raised when a route target leaf is not a string, sequence or mapping."""

    def __init__(
        self,
        value: Any,
        module: str | None = None,
        pattern: str | None = None,
    ):
        self.value = value
        self.module = module
        self.pattern = pattern
        where = ""
        if module is not None:
            where = f" in module {module!r}"
            if pattern is not None:
                where += f" for pattern {pattern!r}"
        super().__init__(
            f"Unrecognized route target kind {type(value).__name__}{where}: {value!r}"
        )

    def located(self, module: str, pattern: str) -> UnrecognizedRouteTargetKind:
        """Return a copy that names the module and pattern it came from."""
        return UnrecognizedRouteTargetKind(self.value, module=module, pattern=pattern)


class EternalDispatchLoop(ShiftError, RuntimeError):
    """Raised when a handler of ``error.dispatch`` itself fails."""

    def __init__(self, failure: DispatchFailure):
        self.failure = failure
        super().__init__(
            f"Handler {failure.module}.{failure.action} failed while handling "
            f"{failure.event_type!r}: {failure.exception!r}"
        )


class SchedulerUnavailable(ShiftError, RuntimeError):
    """Raised when an event is triggered with no event loop to schedule on."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Cannot trigger {event_type!r}: no running event loop and none configured"
        )


@dataclass(frozen=True)
class DispatchFailure:
    """A controller or view raised while handling one resolved route."""

    module: str
    action: str
    event_type: str
    exception: BaseException

    @property
    def route(self) -> str:
        return self.action

    def to_dict(self) -> dict[str, Any]:
        return {
            "module": self.module,
            "route": self.action,
            "action": self.action,
            "eventType": self.event_type,
            "exception": self.exception,
        }


@dataclass(frozen=True)
class BootstrapFailure:
    """A module definition raised while being constructed."""

    module: str
    exception: BaseException

    def to_dict(self) -> dict[str, Any]:
        return {"module": self.module, "exception": self.exception}
