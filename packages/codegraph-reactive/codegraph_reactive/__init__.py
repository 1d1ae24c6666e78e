"""codegraph-reactive - Reactive Repository Detection.

Decides whether a repository interface declares methods that return or
accept reactive wrapper types (awaitables, async iterators, futures,
observables), so that a reactive or an imperative implementation can be
chosen for it.

Quick Start:
    >>> from codegraph_reactive import detect_repository_type
    >>>
    >>> class UserRepository(Protocol):
    ...     def find_all(self) -> AsyncIterator[User]: ...
    >>>
    >>> detect_repository_type(UserRepository)
    <RepositoryType.REACTIVE: 'reactive'>

With precomputed signatures and a custom registry:
    >>> from codegraph_reactive import MethodSignature, ReactiveWrappers, is_reactive
    >>> registry = ReactiveWrappers(extra_types=["myapp.streams.Stream"])
    >>> is_reactive(signatures, registry.is_available(), registry.supports)
"""

__version__ = "0.1.0"  # Keep in sync with pyproject.toml

# =============================================================================
# Detector
# =============================================================================
from codegraph_reactive.detector import (
    ReactiveDetector,
    detect_repository_type,
    find_reactive_methods,
    is_reactive,
    is_reactive_repository,
    uses_wrapper,
)

# =============================================================================
# Error Handling
# =============================================================================
from codegraph_reactive.errors import (
    ConfigurationError,
    IntrospectionError,
    InvalidInterfaceError,
    ReactiveError,
    ValidationError,
)

# =============================================================================
# Introspection
# =============================================================================
from codegraph_reactive.introspection import (
    SourceIntrospector,
    collect_signatures,
    collect_source_signatures,
    load_interface,
    scan_file,
    scan_source,
)

# =============================================================================
# Registry
# =============================================================================
from codegraph_reactive.registry import (
    LibraryStatus,
    ReactiveWrappers,
    WrapperRegistry,
    get_default_registry,
)

# =============================================================================
# Types
# =============================================================================
from codegraph_reactive.types import (
    MethodSignature,
    NormalizationConfig,
    ReactiveLibrary,
    RepositoryType,
    TypeId,
    TypeNormalizer,
)

__all__ = [
    "__version__",
    # Detector
    "ReactiveDetector",
    "is_reactive",
    "uses_wrapper",
    "find_reactive_methods",
    "is_reactive_repository",
    "detect_repository_type",
    # Errors
    "ReactiveError",
    "ValidationError",
    "InvalidInterfaceError",
    "IntrospectionError",
    "ConfigurationError",
    # Introspection
    "collect_signatures",
    "load_interface",
    "SourceIntrospector",
    "collect_source_signatures",
    "scan_source",
    "scan_file",
    # Registry
    "WrapperRegistry",
    "ReactiveWrappers",
    "LibraryStatus",
    "get_default_registry",
    # Types
    "MethodSignature",
    "TypeId",
    "RepositoryType",
    "ReactiveLibrary",
    "TypeNormalizer",
    "NormalizationConfig",
]
