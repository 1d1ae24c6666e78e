"""
Fixtures for reactive detection tests
"""

import pytest

from codegraph_reactive import MethodSignature, ReactiveWrappers

FUTURE = "myapp.FutureOf"
STREAM = "myapp.StreamOf"


@pytest.fixture
def all_available():
    """Probe that reports every library as installed."""
    return lambda module: True


@pytest.fixture
def registry(all_available) -> ReactiveWrappers:
    """Registry with every library available."""
    return ReactiveWrappers(probe=all_available)


@pytest.fixture
def asyncio_only() -> ReactiveWrappers:
    """Registry where only the standard library is installed."""
    return ReactiveWrappers(probe=lambda module: module in ("asyncio", "concurrent.futures"))


@pytest.fixture
def unavailable_registry() -> ReactiveWrappers:
    """Registry that cannot recognize any wrapper type."""
    return ReactiveWrappers(libraries=[])


@pytest.fixture
def supports_stream_and_future():
    """Capability check recognizing FutureOf and StreamOf only."""
    recognized = {FUTURE, STREAM}
    return lambda type_id: type_id in recognized


@pytest.fixture
def imperative_methods() -> list[MethodSignature]:
    return [
        MethodSignature("find_by_id", "myapp.Entity", ("str",)),
        MethodSignature("delete_all", "None"),
    ]
