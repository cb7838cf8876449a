"""
Module records and the live module set.

A module is anything exposing optional ``router``, ``controller`` and
``view`` tables. The ``ModuleSet`` is passed explicitly to the bus; there
is no global module namespace.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

Controller = Callable[[Any], Any]
View = Callable[[Any], Any]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _table(source: Any, name: str) -> Mapping[str, Any] | None:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


@dataclass
class ModuleRecord:
    """What the core reads from one constructed module."""

    namespace: str
    router: Mapping[str, Any] = field(default_factory=dict)
    controller: Mapping[str, Controller] = field(default_factory=dict)
    view: Mapping[str, View] = field(default_factory=dict)
    instance: Any = None

    @classmethod
    def from_instance(cls, namespace: str, instance: Any) -> ModuleRecord:
        """Build a record from a module object or mapping.

        ``dispatcher`` is accepted in place of ``controller``.
        """
        controller = _table(instance, "controller")
        if controller is None:
            controller = _table(instance, "dispatcher")

        return cls(
            namespace=namespace,
            router=_table(instance, "router") or _EMPTY,
            controller=controller or _EMPTY,
            view=_table(instance, "view") or _EMPTY,
            instance=instance,
        )

    def controller_for(self, action: str) -> Controller | None:
        return self.controller.get(action)

    def view_for(self, action: str) -> View | None:
        return self.view.get(action)


class ModuleSet:
    """Insertion-ordered collection of module records keyed by namespace."""

    def __init__(self, records: Iterable[ModuleRecord] = ()):
        self._records: dict[str, ModuleRecord] = {}
        for record in records:
            self.add(record)

    def add(self, record: ModuleRecord) -> None:
        """Add a record; an existing namespace is replaced in place."""
        self._records[record.namespace] = record

    def update(self, other: ModuleSet) -> None:
        for record in other:
            self.add(record)

    def remove(self, namespace: str) -> ModuleRecord | None:
        return self._records.pop(namespace, None)

    def get(self, namespace: str) -> ModuleRecord | None:
        return self._records.get(namespace)

    def names(self) -> list[str]:
        return list(self._records)

    def __iter__(self) -> Iterator[ModuleRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._records

    def __repr__(self) -> str:
        return f"ModuleSet({self.names()!r})"
