"""Shared fixtures for the exporter unit tests."""

from typing import Callable, Optional

import pytest
from prometheus_client import CollectorRegistry

from mongodb_driver_metrics.adapters.event_stream import FakeEventStream


@pytest.fixture
def registry() -> CollectorRegistry:
    """Fresh registry per test, isolated from the global default REGISTRY."""
    return CollectorRegistry()


@pytest.fixture
def stream() -> FakeEventStream:
    return FakeEventStream()


@pytest.fixture
def command_stream() -> FakeEventStream:
    return FakeEventStream(monitor_commands=True)


@pytest.fixture
def sample(registry) -> Callable[..., Optional[float]]:
    """Read one sample value from the test registry by name and labels."""

    def read(name: str, **labels: str) -> Optional[float]:
        return registry.get_sample_value(name, labels)

    return read
