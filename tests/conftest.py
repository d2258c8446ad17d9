"""
Shared pytest fixtures.
"""

import pytest

from apiregistry.registry import ApiRegistry, ChangeBus, MemoryStore


@pytest.fixture
def bus() -> ChangeBus:
    return ChangeBus()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def registry(store: MemoryStore, bus: ChangeBus) -> ApiRegistry:
    return ApiRegistry(store, bus)


@pytest.fixture
def events(bus: ChangeBus) -> list:
    received: list = []
    bus.subscribe(received.append)
    return received
