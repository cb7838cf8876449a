"""
Route targets.

A module's router maps each pattern to a target tree. Raw configuration
values are strings, sequences and mappings; they are parsed into the
``Action`` / ``Group`` / ``Named`` variants and flattened depth-first into
the action ids to dispatch.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union

from shift.errors import UnrecognizedRouteTargetKind


@dataclass(frozen=True)
class Action:
    """A single action id, the only kind of leaf."""

    id: str


@dataclass(frozen=True)
class Group:
    """An ordered sequence of targets."""

    items: tuple[RouteTarget, ...]


@dataclass(frozen=True)
class Named:
    """Targets grouped under arbitrary keys, kept in key order."""

    items: tuple[tuple[Any, RouteTarget], ...]


RouteTarget = Union[Action, Group, Named]


def parse_target(raw: Any) -> RouteTarget:
    """Convert a raw router value into a ``RouteTarget``.

    Raises:
        UnrecognizedRouteTargetKind: If a leaf is not a string, list,
            tuple or mapping.
    """
    if isinstance(raw, (Action, Group, Named)):
        return raw
    if isinstance(raw, str):
        return Action(raw)
    if isinstance(raw, (list, tuple)):
        return Group(tuple(parse_target(item) for item in raw))
    if isinstance(raw, Mapping):
        return Named(tuple((key, parse_target(value)) for key, value in raw.items()))
    raise UnrecognizedRouteTargetKind(raw)


def flatten(target: RouteTarget) -> Iterator[str]:
    """Yield the action ids of ``target`` in depth-first order."""
    if isinstance(target, Action):
        yield target.id
    elif isinstance(target, Group):
        for item in target.items:
            yield from flatten(item)
    elif isinstance(target, Named):
        for _, item in target.items:
            yield from flatten(item)
    else:
        raise UnrecognizedRouteTargetKind(target)
