"""
Module bootstrap.

Constructs module definitions against the registry and collects the
results into a fresh ``ModuleSet``. Construction failures are collected,
never raised.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from shift.errors import BootstrapFailure
from shift.logging_config import get_logger
from shift.modules import ModuleRecord, ModuleSet
from shift.registry import ServiceRegistry

logger = get_logger(__name__)

ModuleDefinition = Callable[[ServiceRegistry], Any]


@dataclass
class BootstrapResult:
    modules: ModuleSet
    errors: list[BootstrapFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def bootstrap(
    definitions: Mapping[str, ModuleDefinition],
    registry: ServiceRegistry,
) -> BootstrapResult:
    """Construct every definition in mapping order.

    Args:
        definitions: Namespace -> callable taking the registry
        registry: Passed as the sole constructor argument

    Returns:
        The constructed modules and one failure per definition that raised
    """
    result = BootstrapResult(modules=ModuleSet())

    for namespace, definition in definitions.items():
        try:
            instance = definition(registry)
        except Exception as exc:
            logger.warning("module_bootstrap_failed", module=namespace, error=repr(exc))
            result.errors.append(BootstrapFailure(module=namespace, exception=exc))
            continue
        result.modules.add(ModuleRecord.from_instance(namespace, instance))
        logger.debug("module_bootstrapped", module=namespace)

    logger.info(
        "bootstrap_complete",
        modules=len(result.modules),
        failures=len(result.errors),
    )
    return result
