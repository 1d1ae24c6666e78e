"""
Registry Module

Reactive wrapper type registry (capability oracle for the detector).
"""

from codegraph_reactive.registry.wrappers import (
    LIBRARY_WRAPPER_TYPES,
    LibraryStatus,
    ReactiveWrappers,
    WrapperRegistry,
    get_default_registry,
)

__all__ = [
    "WrapperRegistry",
    "ReactiveWrappers",
    "LibraryStatus",
    "LIBRARY_WRAPPER_TYPES",
    "get_default_registry",
]
