"""
Event bus: resolves triggered events against the live module set and
schedules one dispatch per resolved route on the asyncio event loop.

Usage:
    bus = EventBus(modules)
    bus.trigger("user.created", {"id": 42})
    await bus.drain()
"""

from __future__ import annotations

import asyncio
from typing import Any

from shift.dispatch import dispatch
from shift.errors import DispatchFailure, EternalDispatchLoop, SchedulerUnavailable
from shift.events import ERROR_DISPATCH
from shift.logging_config import get_logger
from shift.modules import ModuleSet
from shift.routing.resolver import resolve

logger = get_logger(__name__)


class EventBus:
    """
    Pattern-routed event bus.

    ``trigger`` never runs a handler itself: routes are resolved
    synchronously and each dispatch is scheduled as its own task, so the
    caller always regains control first.

    Handler failures are re-triggered as ``error.dispatch``. A failure
    while handling ``error.dispatch`` is fatal (``EternalDispatchLoop``).
    """

    def __init__(
        self,
        modules: ModuleSet | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        """
        Initialize event bus.

        Args:
            modules: Live module set, shared by reference
            loop: Event loop to schedule on (the running loop if omitted)
        """
        self.modules = modules if modules is not None else ModuleSet()
        self._loop = loop
        self._tasks: set[asyncio.Task[bool]] = set()
        self._fatal: BaseException | None = None
        self._stats = {"triggered": 0, "dispatched": 0, "failed": 0}

    # -------------------------------------------------------------------------
    # Triggering
    # -------------------------------------------------------------------------

    def trigger(self, event_type: str, payload: Any = None) -> None:
        """
        Trigger an event.

        Args:
            event_type: Dot-segmented event name
            payload: Arbitrary payload passed to the first handler

        Raises:
            UnrecognizedRouteTargetKind: A matching route is misconfigured
            SchedulerUnavailable: Routes matched but there is no loop
        """
        routes = resolve(event_type, self.modules)
        self._stats["triggered"] += 1

        if not routes:
            logger.debug("event_unrouted", type=event_type)
            return

        loop = self._get_loop(event_type)
        for route in routes:
            task = loop.create_task(dispatch(route, event_type, payload, self))
            self._tasks.add(task)
            task.add_done_callback(self._on_dispatch_done)

        logger.debug("event_triggered", type=event_type, routes=len(routes))

    def _get_loop(self, event_type: str) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            raise SchedulerUnavailable(event_type) from None

    # -------------------------------------------------------------------------
    # Error policy
    # -------------------------------------------------------------------------

    def escalate(self, failure: DispatchFailure) -> None:
        """
        Report a handler failure.

        Raises:
            EternalDispatchLoop: If the failure happened while handling
                ``error.dispatch`` itself
        """
        self._stats["failed"] += 1

        if failure.event_type == ERROR_DISPATCH:
            logger.critical(
                "eternal_dispatch_loop",
                module=failure.module,
                action=failure.action,
                error=repr(failure.exception),
            )
            raise EternalDispatchLoop(failure) from failure.exception

        logger.warning(
            "dispatch_failed",
            module=failure.module,
            action=failure.action,
            type=failure.event_type,
            error=repr(failure.exception),
        )
        self.trigger(ERROR_DISPATCH, failure)

    def _on_dispatch_done(self, task: asyncio.Task[bool]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return

        exc = task.exception()
        if exc is None:
            if task.result():
                self._stats["dispatched"] += 1
            return

        if self._fatal is None:
            self._fatal = exc
        task.get_loop().call_exception_handler(
            {
                "message": "Fatal error in event dispatch",
                "exception": exc,
                "task": task,
            }
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def pending(self) -> int:
        """Number of scheduled dispatches that have not finished."""
        return len(self._tasks)

    @property
    def fatal(self) -> BaseException | None:
        """The first error that escaped a dispatch and has not been raised yet."""
        return self._fatal

    async def drain(self) -> None:
        """
        Wait until no dispatch is pending.

        Dispatches scheduled by running handlers are waited for as well.
        A recorded fatal error is raised once and then cleared.

        Raises:
            EternalDispatchLoop: If an ``error.dispatch`` handler failed
        """
        while self._tasks:
            await asyncio.wait(list(self._tasks))
        if self._fatal is not None:
            fatal, self._fatal = self._fatal, None
            raise fatal

    def stats(self) -> dict[str, Any]:
        """Get event bus statistics."""
        return {
            **self._stats,
            "modules": len(self.modules),
            "pending": self.pending,
        }
