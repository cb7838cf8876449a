"""Pytest configuration and shared fixtures."""

import logging

import pytest

from shift.bus import EventBus
from shift.modules import ModuleRecord, ModuleSet
from shift.registry import ServiceRegistry


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "property: hypothesis property-based test")


@pytest.fixture(autouse=True)
def _detach_log_handlers():
    """Drop root handlers bound to per-test capture streams."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()


@pytest.fixture
def modules():
    return ModuleSet()


@pytest.fixture
def bus(modules):
    return EventBus(modules)


@pytest.fixture
def registry():
    return ServiceRegistry()


@pytest.fixture
def recorder():
    """Module that records every error.dispatch payload it sees."""
    seen = []
    record = ModuleRecord(
        namespace="recorder",
        router={"error.dispatch": "record"},
        view={"record": seen.append},
    )
    return record, seen
