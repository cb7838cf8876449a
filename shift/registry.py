"""
Service registry.

Namespace-keyed store for shared services. Namespaces are
case-insensitive. An entry is either EAGER (the stored value is returned)
or FACTORY (the stored callable is invoked on first ``get`` and its result
cached as an EAGER entry).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from shift.errors import NamespaceUndefined, UnrecognizedMode
from shift.logging_config import get_logger

logger = get_logger(__name__)


class Mode(Enum):
    """How a registry entry is retrieved."""

    EAGER = "eager"
    FACTORY = "factory"


@dataclass
class RegistryEntry:
    """A stored value and how to retrieve it."""

    namespace: str
    mode: Mode
    payload: Any


def _normalize(namespace: str) -> str:
    return namespace.lower()


class ServiceRegistry:
    """
    Service registry.

    Usage:
        registry = ServiceRegistry()
        registry.set("mailer", Mailer())
        registry.set("db", lambda: connect(), Mode.FACTORY)
        db = registry.get("db")  # factory runs once, result is cached
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}

    def set(self, namespace: str, value: Any, mode: Mode = Mode.EAGER) -> None:
        """Store ``value`` under ``namespace``, replacing any previous entry."""
        key = _normalize(namespace)
        self._entries[key] = RegistryEntry(key, mode, value)
        logger.debug("service_set", namespace=key, mode=getattr(mode, "value", mode))

    def set_factory(self, namespace: str, factory: Callable[[], Any]) -> None:
        self.set(namespace, factory, Mode.FACTORY)

    def get(self, namespace: str) -> Any:
        """
        Retrieve the service stored under ``namespace``.

        Raises:
            NamespaceUndefined: Nothing is stored under the namespace
            UnrecognizedMode: The entry's mode is not a ``Mode``
        """
        key = _normalize(namespace)
        entry = self._entries.get(key)
        if entry is None:
            raise NamespaceUndefined(namespace)

        if entry.mode is Mode.EAGER:
            return entry.payload

        if entry.mode is Mode.FACTORY:
            value = entry.payload()
            entry.payload = value
            entry.mode = Mode.EAGER
            logger.debug("service_constructed", namespace=key)
            return value

        raise UnrecognizedMode(namespace, entry.mode)

    def has(self, namespace: str) -> bool:
        return _normalize(namespace) in self._entries

    def remove(self, namespace: str) -> None:
        """Remove a namespace; does nothing if it is absent."""
        self._entries.pop(_normalize(namespace), None)

    def get_all(self) -> dict[str, Any]:
        """Snapshot of every stored payload. Factories are not invoked."""
        return {key: entry.payload for key, entry in self._entries.items()}

    def __contains__(self, namespace: object) -> bool:
        return isinstance(namespace, str) and self.has(namespace)

    def __len__(self) -> int:
        return len(self._entries)
