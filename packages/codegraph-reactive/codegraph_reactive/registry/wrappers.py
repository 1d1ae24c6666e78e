"""Reactive Wrapper Registry.

Knows which type identifiers are reactive wrappers (awaitables, async
streams, futures, observables) and whether any of them can be recognized
in the current environment.

The detector only depends on the WrapperRegistry protocol, so the set of
recognized wrapper types can be swapped or extended without touching it.

Usage:
    >>> registry = ReactiveWrappers()
    >>> registry.is_available()
    True
    >>> registry.supports("collections.abc.AsyncIterator")
    True
    >>> registry.supports("typing.Awaitable[int]")
    True
"""

from __future__ import annotations

import importlib.util
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from codegraph_reactive.errors import ConfigurationError
from codegraph_reactive.logging import get_logger
from codegraph_reactive.types.enums import ReactiveLibrary
from codegraph_reactive.types.normalizer import TypeNormalizer, default_normalizer
from codegraph_reactive.types.signature import TypeId

if TYPE_CHECKING:
    from codegraph_reactive.config import ReactiveSettings

logger = get_logger(__name__)


@runtime_checkable
class WrapperRegistry(Protocol):
    """Capability oracle for reactive wrapper types.

    Implementations must be safe for concurrent reads.
    """

    def is_available(self) -> bool:
        """Whether any wrapper type can be recognized at all."""
        ...

    def supports(self, type_id: TypeId) -> bool:
        """Whether `type_id` is a recognized reactive wrapper type."""
        ...


LIBRARY_WRAPPER_TYPES: dict[ReactiveLibrary, frozenset[TypeId]] = {
    ReactiveLibrary.ASYNCIO: frozenset(
        {
            "collections.abc.Awaitable",
            "collections.abc.Coroutine",
            "collections.abc.AsyncIterator",
            "collections.abc.AsyncIterable",
            "collections.abc.AsyncGenerator",
            "asyncio.Future",
            "asyncio.Task",
        }
    ),
    ReactiveLibrary.CONCURRENT_FUTURES: frozenset({"concurrent.futures.Future"}),
    ReactiveLibrary.REACTIVEX: frozenset({"reactivex.Observable", "reactivex.subject.Subject"}),
    ReactiveLibrary.RX: frozenset({"rx.Observable", "rx.subject.Subject"}),
}


def _find_module(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


@dataclass(frozen=True)
class LibraryStatus:
    """Availability report for one enabled library."""

    library: ReactiveLibrary
    available: bool
    wrapper_types: tuple[TypeId, ...]


class ReactiveWrappers:
    """Default WrapperRegistry backed by ReactiveLibrary detection.

    A library is available when its probe module can be found. Only the
    wrapper types of available libraries (plus configured extra types) are
    supported.

    Thread Safety:
        - Availability is probed once, at construction
        - All state is immutable afterwards
    """

    def __init__(
        self,
        libraries: Iterable[ReactiveLibrary] | None = None,
        extra_types: Iterable[str] = (),
        normalizer: TypeNormalizer | None = None,
        probe: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize registry.

        Args:
            libraries: Enabled libraries (default: all)
            extra_types: Additional wrapper type identifiers
            normalizer: Normalizer applied to every identifier
            probe: Module presence check (default: importlib.util.find_spec)
        """
        self._normalizer = normalizer or default_normalizer
        probe = probe or _find_module

        enabled = tuple(ReactiveLibrary) if libraries is None else tuple(dict.fromkeys(libraries))
        self._statuses = tuple(
            LibraryStatus(
                library=library,
                available=probe(library.probe_module),
                wrapper_types=tuple(sorted(LIBRARY_WRAPPER_TYPES[library])),
            )
            for library in enabled
        )
        self._extra_types = frozenset(self._normalizer.normalize(name) for name in extra_types if name)

        supported: set[TypeId] = set(self._extra_types)
        for status in self._statuses:
            if status.available:
                supported.update(self._normalizer.normalize(name) for name in status.wrapper_types)
        self._supported = frozenset(supported)

        logger.debug(
            "wrapper_registry_initialized",
            available=[s.library.value for s in self._statuses if s.available],
            extra_types=sorted(self._extra_types),
        )

    @classmethod
    def from_settings(cls, settings: ReactiveSettings) -> ReactiveWrappers:
        """Build a registry from settings.

        Raises:
            ConfigurationError: Unknown library name in disabled_libraries
        """
        disabled: set[ReactiveLibrary] = set()
        for name in settings.disabled_libraries:
            try:
                disabled.add(ReactiveLibrary.from_string(name))
            except ValueError as e:
                raise ConfigurationError(str(e), setting="disabled_libraries", value=name) from e

        libraries = [library for library in ReactiveLibrary if library not in disabled]
        return cls(libraries=libraries, extra_types=settings.extra_wrapper_types)

    def is_available(self) -> bool:
        return bool(self._supported)

    def supports(self, type_id: TypeId) -> bool:
        if not type_id:
            return False
        return self._normalizer.normalize(type_id) in self._supported

    @property
    def supported_types(self) -> frozenset[TypeId]:
        return self._supported

    @property
    def extra_types(self) -> frozenset[TypeId]:
        return self._extra_types

    def describe(self) -> list[LibraryStatus]:
        """Availability of every enabled library, in declaration order."""
        return list(self._statuses)

    def __repr__(self) -> str:
        available = ", ".join(s.library.value for s in self._statuses if s.available)
        return f"ReactiveWrappers(available=[{available}], extra_types={len(self._extra_types)})"


@lru_cache(maxsize=1)
def get_default_registry() -> ReactiveWrappers:
    """Registry built from environment settings (cached)."""
    from codegraph_reactive.config import load_settings

    return ReactiveWrappers.from_settings(load_settings())
