"""Enums for codegraph-reactive."""

from enum import Enum


class RepositoryType(str, Enum):
    """Implementation strategy for a repository interface.

    IMPERATIVE: plain synchronous methods only.
    REACTIVE: at least one method returns or accepts a reactive wrapper.
    """

    IMPERATIVE = "imperative"
    REACTIVE = "reactive"

    @classmethod
    def of(cls, reactive: bool) -> "RepositoryType":
        return cls.REACTIVE if reactive else cls.IMPERATIVE


class ReactiveLibrary(str, Enum):
    """Families of reactive wrapper types known to the default registry."""

    ASYNCIO = "asyncio"
    CONCURRENT_FUTURES = "concurrent_futures"
    REACTIVEX = "reactivex"
    RX = "rx"

    @property
    def probe_module(self) -> str:
        """Module whose presence makes the library available."""
        return _PROBE_MODULES[self]

    @classmethod
    def from_string(cls, value: str) -> "ReactiveLibrary":
        """Parse a library name (case-insensitive, '-' and '_' interchangeable).

        Raises:
            ValueError: Unknown library name
        """
        key = value.strip().lower().replace("-", "_")
        for library in cls:
            if library.value == key:
                return library
        valid = ", ".join(lib.value for lib in cls)
        raise ValueError(f"Unknown reactive library: {value!r} (valid: {valid})")


_PROBE_MODULES = {
    ReactiveLibrary.ASYNCIO: "asyncio",
    ReactiveLibrary.CONCURRENT_FUTURES: "concurrent.futures",
    ReactiveLibrary.REACTIVEX: "reactivex",
    ReactiveLibrary.RX: "rx",
}
