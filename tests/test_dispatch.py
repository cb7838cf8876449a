import asyncio

from shift.dispatch import dispatch
from shift.errors import DispatchFailure
from shift.modules import ModuleRecord
from shift.routing.resolver import ResolvedRoute


def _run(bus, route, event_type, payload):
    async def main():
        ok = await dispatch(route, event_type, payload, bus)
        await bus.drain()
        return ok

    return asyncio.run(main())


def test_controller_result_is_passed_to_view(bus, modules):
    seen = []
    modules.add(
        ModuleRecord(
            "mail",
            controller={"notify": lambda payload: payload["id"] * 2},
            view={"notify": seen.append},
        )
    )

    assert _run(bus, ResolvedRoute("mail", "notify"), "user.created", {"id": 21}) is True

    assert seen == [42]


def test_payload_passes_through_without_controller(bus, modules):
    seen = []
    payload = {"id": 1}
    modules.add(ModuleRecord("audit", view={"log": seen.append}))

    _run(bus, ResolvedRoute("audit", "log"), "user", payload)

    assert seen[0] is payload


def test_missing_view_is_not_an_error(bus, modules, recorder):
    calls = []
    record, failures = recorder
    modules.add(record)
    modules.add(ModuleRecord("mail", controller={"notify": calls.append}))

    _run(bus, ResolvedRoute("mail", "notify"), "user.created", "x")

    assert calls == ["x"]
    assert failures == []


def test_async_handlers_are_awaited(bus, modules):
    seen = []

    async def controller(payload):
        await asyncio.sleep(0)
        return payload + 1

    async def view(payload):
        seen.append(payload)

    modules.add(ModuleRecord("calc", controller={"inc": controller}, view={"inc": view}))

    _run(bus, ResolvedRoute("calc", "inc"), "calc.inc", 1)

    assert seen == [2]


def test_controller_failure_skips_view_and_escalates(bus, modules, recorder):
    record, failures = recorder
    views = []
    error = ValueError("bad payload")

    def controller(payload):
        raise error

    modules.add(record)
    modules.add(ModuleRecord("mail", controller={"notify": controller}, view={"notify": views.append}))

    assert _run(bus, ResolvedRoute("mail", "notify"), "user.created", {}) is False

    assert views == []
    assert failures == [
        DispatchFailure(module="mail", action="notify", event_type="user.created", exception=error)
    ]


def test_view_failure_escalates(bus, modules, recorder):
    record, failures = recorder

    def view(payload):
        raise RuntimeError("render failed")

    modules.add(record)
    modules.add(ModuleRecord("mail", view={"notify": view}))

    _run(bus, ResolvedRoute("mail", "notify"), "user.created", {})

    assert len(failures) == 1
    assert failures[0].route == "notify"
    assert isinstance(failures[0].exception, RuntimeError)


def test_module_removed_before_dispatch_is_skipped(bus):
    assert _run(bus, ResolvedRoute("gone", "notify"), "user.created", {}) is False
    assert bus.stats()["failed"] == 0
