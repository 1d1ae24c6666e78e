"""Type Normalizer - Type Identifier Normalization.

Purpose: Map the many spellings of one Python type to a single raw identifier.

Features:
    - Generic argument stripping (AsyncIterator[int] → AsyncIterator)
    - Alias resolution (typing.Awaitable → collections.abc.Awaitable)
    - Implementation module folding (_asyncio.Future → asyncio.Future)
    - Namespace stripping (optional)
    - Runtime annotation objects → identifiers (type_id)

Usage:
    >>> normalizer = TypeNormalizer()
    >>> normalizer.normalize("typing.AsyncIterator[User]")
    'collections.abc.AsyncIterator'
    >>> normalizer.type_id(concurrent.futures.Future)
    'concurrent.futures.Future'
"""

import inspect
import typing
from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from codegraph_reactive.types.signature import ANY_TYPE, TypeId


@dataclass
class NormalizationConfig:
    """Configuration for type normalization."""

    # Drop generic arguments ("Foo[int]" → "Foo")
    strip_generics: bool = True

    # Alias resolution
    resolve_aliases: bool = True

    # Strip package prefixes (e.g., "foo.bar.Baz" → "Baz")
    strip_packages: bool = False

    # Custom normalization function
    custom_normalizer: Callable[[str], str] | None = None


_ABC_NAMES = ("Awaitable", "Coroutine", "AsyncIterator", "AsyncIterable", "AsyncGenerator")

# Default type aliases (Python ecosystem)
DEFAULT_ALIASES: dict[str, str] = {
    # typing / typing_extensions re-exports of collections.abc
    **{f"typing.{name}": f"collections.abc.{name}" for name in _ABC_NAMES},
    **{f"typing_extensions.{name}": f"collections.abc.{name}" for name in _ABC_NAMES},
    **{f"_collections_abc.{name}": f"collections.abc.{name}" for name in _ABC_NAMES},
    # Optional[X] and X | Y are unions at runtime
    "typing.Optional": "typing.Union",
    "types.UnionType": "typing.Union",
    # asyncio C accelerator and submodules
    "_asyncio.Future": "asyncio.Future",
    "_asyncio.Task": "asyncio.Task",
    "asyncio.futures.Future": "asyncio.Future",
    "asyncio.tasks.Task": "asyncio.Task",
    # concurrent.futures
    "concurrent.futures._base.Future": "concurrent.futures.Future",
    # ReactiveX (RxPY 4)
    "reactivex.observable.observable.Observable": "reactivex.Observable",
    "reactivex.observable.Observable": "reactivex.Observable",
    "reactivex.subject.subject.Subject": "reactivex.subject.Subject",
    # RxPY 3
    "rx.core.observable.observable.Observable": "rx.Observable",
    "rx.core.Observable": "rx.Observable",
    "rx.subject.subject.Subject": "rx.subject.Subject",
}


class TypeNormalizer:
    """Type identifier normalizer.

    Thread Safety:
        - All state is immutable after construction
        - add_alias() returns NEW normalizer
        - Safe for concurrent use

    Example:
        >>> normalizer = TypeNormalizer()
        >>> normalizer.normalize("_asyncio.Future")
        'asyncio.Future'
    """

    def __init__(
        self,
        config: NormalizationConfig | None = None,
        custom_aliases: dict[str, str] | None = None,
    ) -> None:
        """Initialize normalizer.

        Args:
            config: Normalization configuration
            custom_aliases: Custom type aliases (merged with defaults)
        """
        self.config = config or NormalizationConfig()

        aliases = dict(DEFAULT_ALIASES)
        if custom_aliases:
            aliases.update(custom_aliases)

        self._aliases = MappingProxyType(aliases)

    def normalize(self, type_name: str) -> TypeId:
        """Normalize a type identifier.

        Steps:
            1. Whitespace and generic argument stripping
            2. Custom normalizer (if configured)
            3. Alias resolution
            4. Package stripping (if configured)

        Args:
            type_name: Type name to normalize

        Returns:
            Normalized type identifier
        """
        if not type_name:
            return type_name

        result = type_name.strip()

        if self.config.strip_generics and "[" in result:
            result = result.split("[", 1)[0].strip()

        if self.config.custom_normalizer:
            result = self.config.custom_normalizer(result)

        if self.config.resolve_aliases:
            result = self._aliases.get(result, result)

        if self.config.strip_packages:
            result = self._strip_package(result)

        return result

    def type_id(self, annotation: Any) -> TypeId:
        """Map a runtime annotation object to its raw type identifier.

        Only the raw/base type is used: type arguments of parameterized
        types are never inspected.

        Args:
            annotation: Annotation as returned by typing.get_type_hints()
                or found in __annotations__

        Returns:
            Normalized type identifier

        Example:
            >>> normalizer.type_id(AsyncIterator[int])
            'collections.abc.AsyncIterator'
            >>> normalizer.type_id(None)
            'None'
        """
        if annotation is inspect.Parameter.empty or annotation is typing.Any:
            return ANY_TYPE
        if annotation is None or annotation is type(None):
            return "None"
        if isinstance(annotation, str):
            return self.normalize(annotation)

        origin = typing.get_origin(annotation)
        if origin is typing.Annotated:
            return self.type_id(typing.get_args(annotation)[0])

        target = origin if origin is not None else annotation
        return self.normalize(_qualified_name(target))

    def add_alias(self, from_type: str, to_type: str) -> "TypeNormalizer":
        """Add custom alias and return NEW normalizer.

        IMMUTABILITY: Returns new instance instead of mutating.

        Args:
            from_type: Source type name
            to_type: Target type name

        Returns:
            New TypeNormalizer with added alias
        """
        new_aliases = dict(self._aliases)
        new_aliases[from_type] = to_type
        return TypeNormalizer._from_aliases(self.config, new_aliases)

    @classmethod
    def _from_aliases(cls, config: NormalizationConfig, aliases: dict[str, str]) -> "TypeNormalizer":
        """Create normalizer from pre-built aliases (internal)."""
        instance = cls.__new__(cls)
        instance.config = config
        instance._aliases = MappingProxyType(aliases)
        return instance

    def _strip_package(self, type_name: str) -> str:
        """Strip package prefix ("foo.bar.Baz" → "Baz")."""
        if "." not in type_name:
            return type_name

        return type_name.rsplit(".", 1)[-1]

    def get_aliases(self) -> dict[str, str]:
        """Get all configured aliases (copy)."""
        return dict(self._aliases)


def _qualified_name(target: Any) -> str:
    if isinstance(target, typing.TypeVar):
        return f"~{target.__name__}"

    if isinstance(target, type):
        module = target.__module__
        qualname = target.__qualname__
        if module == "builtins":
            return qualname
        return f"{module}.{qualname}"

    # typing special forms (Union, Callable, Literal, ...)
    name = getattr(target, "_name", None) or getattr(target, "__name__", None)
    module = getattr(target, "__module__", None)
    if name and module:
        return f"{module}.{name}"

    return repr(target)


# Singleton for common use
default_normalizer = TypeNormalizer()
