"""
Route resolution: event name -> ordered (module, action) pairs.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shift.errors import UnrecognizedRouteTargetKind
from shift.routing.matcher import matches
from shift.routing.targets import flatten, parse_target

if TYPE_CHECKING:
    from shift.modules import ModuleRecord


@dataclass(frozen=True)
class ResolvedRoute:
    """One matched leaf: the module that owns it and the action to run."""

    module: str
    action: str

    def __str__(self) -> str:
        return f"{self.module}.{self.action}"


def resolve(event_type: str, modules: Iterable[ModuleRecord]) -> list[ResolvedRoute]:
    """Find every route matching ``event_type``.

    Modules are walked in enumeration order, patterns in router order, and
    each matching target tree depth-first.

    Raises:
        UnrecognizedRouteTargetKind: If a matching pattern's target holds a
            leaf of an unsupported kind. Nothing is returned in that case.
    """
    resolved: list[ResolvedRoute] = []

    for module in modules:
        if not module.router:
            continue
        for pattern, raw in module.router.items():
            if not matches(pattern, event_type):
                continue
            try:
                target = parse_target(raw)
            except UnrecognizedRouteTargetKind as exc:
                raise exc.located(module.namespace, pattern) from None
            resolved.extend(
                ResolvedRoute(module.namespace, action) for action in flatten(target)
            )

    return resolved
