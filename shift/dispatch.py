"""
Dispatch of a single resolved route.

The module's controller (if it has one for the action) transforms the
payload, then the view (if any) consumes the result. Failures are turned
into a ``DispatchFailure`` record and handed to the bus instead of being
raised.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable

from shift.errors import DispatchFailure
from shift.logging_config import get_logger

if TYPE_CHECKING:
    from shift.bus import EventBus
    from shift.routing.resolver import ResolvedRoute

logger = get_logger(__name__)


async def _call(handler: Callable[[Any], Any], payload: Any) -> Any:
    result = handler(payload)
    if inspect.isawaitable(result):
        result = await result
    return result


async def dispatch(
    route: ResolvedRoute,
    event_type: str,
    payload: Any,
    bus: EventBus,
) -> bool:
    """Run the controller then the view of ``route`` for one event.

    Handlers may be plain callables or coroutine functions.

    Returns:
        True if the handlers ran without raising, False if the failure
        was escalated or the module is gone
    """
    module = bus.modules.get(route.module)
    if module is None:
        logger.debug("dispatch_module_missing", module=route.module, action=route.action)
        return False

    try:
        controller = module.controller_for(route.action)
        if controller is not None:
            payload = await _call(controller, payload)

        view = module.view_for(route.action)
        if view is not None:
            await _call(view, payload)
    except Exception as exc:
        bus.escalate(
            DispatchFailure(
                module=route.module,
                action=route.action,
                event_type=event_type,
                exception=exc,
            )
        )
        return False

    logger.debug(
        "dispatch_completed",
        module=route.module,
        action=route.action,
        type=event_type,
    )
    return True