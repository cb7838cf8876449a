"""
Application wiring: registry, live module set, event bus and bootstrap.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping

from shift.bootstrap import BootstrapResult, ModuleDefinition, bootstrap
from shift.bus import EventBus
from shift.config import ShiftConfig
from shift.errors import ShiftError
from shift.events import ERROR_BOOTSTRAP, READY
from shift.logging_config import get_logger
from shift.modules import ModuleSet
from shift.registry import Mode, ServiceRegistry

logger = get_logger(__name__)


class Shift:
    """A Shift application.

    Usage:
        app = Shift({"mail": Mail, "audit": Audit})
        app.run()

    The bus is stored in the registry before any module is constructed,
    so constructors can fetch it with ``registry.get("event-bus")``.
    """

    def __init__(
        self,
        definitions: Mapping[str, ModuleDefinition] | None = None,
        config: ShiftConfig | None = None,
        registry: ServiceRegistry | None = None,
    ):
        self.config = config or ShiftConfig()
        self.registry = registry if registry is not None else ServiceRegistry()
        self.modules = ModuleSet()
        self.bus = EventBus(self.modules)
        self.registry.set(self.config.bus_namespace, self.bus, Mode.EAGER)
        self._definitions: dict[str, ModuleDefinition] = dict(definitions or {})
        self._started = False

    def register(self, namespace: str, definition: ModuleDefinition) -> None:
        """Add a module definition. Only allowed before ``start``."""
        if self._started:
            raise ShiftError(f"Cannot register {namespace!r}: application already started")
        self._definitions[namespace] = definition

    async def start(self, ready: Awaitable[object] | None = None) -> BootstrapResult:
        """Bootstrap the modules and announce the outcome on the bus.

        Args:
            ready: Optional awaitable that resolves once the host is ready

        Returns:
            The bootstrap result
        """
        if self._started:
            raise ShiftError("Application already started")
        self._started = True

        if ready is not None:
            await ready

        result = bootstrap(self._definitions, self.registry)
        self.modules.update(result.modules)

        for failure in result.errors:
            self.bus.trigger(ERROR_BOOTSTRAP, failure)
        self.bus.trigger(READY)

        logger.info("shift_started", modules=self.modules.names())
        return result

    async def serve(self, ready: Awaitable[object] | None = None) -> BootstrapResult:
        """Start, then wait until the bus has no pending dispatches."""
        result = await self.start(ready)
        await self.bus.drain()
        return result

    def run(self, ready: Awaitable[object] | None = None) -> BootstrapResult:
        """Run the application on a new event loop until the bus drains.

        Raises:
            EternalDispatchLoop: If an ``error.dispatch`` handler failed
        """
        return asyncio.run(self.serve(ready))
