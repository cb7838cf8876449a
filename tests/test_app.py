import asyncio

import pytest

from shift.app import Shift
from shift.config import ShiftConfig
from shift.errors import BootstrapFailure, EternalDispatchLoop, ShiftError
from shift.events import ERROR_BOOTSTRAP, READY


class Listener:
    """Records every lifecycle event it is routed."""

    def __init__(self, registry):
        self.seen = []
        self.bus = registry.get("event-bus")
        self.router = {ERROR_BOOTSTRAP: "failed", READY: "ready"}
        self.view = {
            "failed": lambda payload: self.seen.append(("failed", payload)),
            "ready": lambda payload: self.seen.append(("ready", payload)),
        }


class Broken:
    def __init__(self, registry):
        raise ValueError("cannot start")


def test_run_reports_failures_then_ready():
    app = Shift({"listener": Listener, "broken": Broken, "other": Broken})
    result = app.run()

    listener = app.modules.get("listener").instance
    assert [name for name, _ in listener.seen] == ["failed", "failed", "ready"]
    assert [payload.module for _, payload in listener.seen[:2]] == ["broken", "other"]
    assert isinstance(listener.seen[0][1], BootstrapFailure)
    assert listener.seen[2][1] is None
    assert app.modules.names() == ["listener"]
    assert len(result.errors) == 2


def test_bus_is_registered_before_construction():
    app = Shift({"listener": Listener})
    app.run()
    assert app.modules.get("listener").instance.bus is app.bus
    assert app.registry.get("EVENT-BUS") is app.bus


def test_bus_namespace_comes_from_config():
    app = Shift(config=ShiftConfig(bus_namespace="bus"))
    assert app.registry.get("bus") is app.bus
    assert not app.registry.has("event-bus")


def test_register_before_start_only():
    app = Shift()
    app.register("listener", Listener)
    app.run()

    assert "listener" in app.modules
    with pytest.raises(ShiftError):
        app.register("late", Listener)


def test_start_twice_raises():
    app = Shift()

    async def main():
        await app.start()
        with pytest.raises(ShiftError):
            await app.start()
        await app.bus.drain()

    asyncio.run(main())


def test_start_waits_for_ready():
    app = Shift({"listener": Listener})
    steps = []

    async def ready():
        steps.append(("ready", len(app.modules)))

    async def main():
        await app.start(ready())
        await app.bus.drain()

    asyncio.run(main())
    assert steps == [("ready", 0)]
    assert "listener" in app.modules


def test_run_raises_eternal_loop():
    class BadErrorHandler:
        router = {"shift.ready": "go", "error.dispatch": "report"}

        def __init__(self, registry):
            self.view = {"go": self.fail, "report": self.fail}

        def fail(self, payload):
            raise RuntimeError("handler broke")

    app = Shift({"bad": BadErrorHandler})
    with pytest.raises(EternalDispatchLoop):
        app.run()
