"""
Reactive Repository Detection

Decides whether a repository interface uses reactive wrapper types
(awaitables, async streams, futures, observables) as return type or
parameter types of any of its methods. The answer picks a reactive or an
imperative implementation strategy for the interface.

Usage:
    >>> detect_repository_type(UserRepository)
    <RepositoryType.REACTIVE: 'reactive'>

    >>> is_reactive(signatures, registry.is_available(), registry.supports)
    True
"""

from collections.abc import Callable, Iterable

from codegraph_reactive.errors import InvalidInterfaceError
from codegraph_reactive.introspection.runtime import collect_signatures
from codegraph_reactive.logging import get_logger
from codegraph_reactive.registry.wrappers import WrapperRegistry, get_default_registry
from codegraph_reactive.types.enums import RepositoryType
from codegraph_reactive.types.signature import MethodSignature, TypeId

logger = get_logger(__name__)

Supports = Callable[[TypeId], bool]


def is_reactive(
    methods: Iterable[MethodSignature],
    registry_available: bool,
    supports: Supports,
) -> bool:
    """
    Check whether any method uses a reactive wrapper type.

    Returns False without iterating when the registry is unavailable.
    Stops at the first matching method.

    Args:
        methods: Method signatures of the interface
        registry_available: Result of the registry's availability check
        supports: Wrapper type check of the registry

    Returns:
        True if at least one method returns or accepts a wrapper type

    Raises:
        InvalidInterfaceError: methods is None or supports is not callable
    """
    _require_inputs(methods, supports)

    if not registry_available:
        logger.debug("registry_unavailable")
        return False

    return any(uses_wrapper(method, supports) for method in methods)


def uses_wrapper(method: MethodSignature, supports: Supports) -> bool:
    """Return type first, then parameter types in declaration order."""
    if supports(method.return_type):
        logger.debug("reactive_method_found", method=method.name, type_id=method.return_type, position="return")
        return True

    for parameter_type in method.parameter_types:
        if supports(parameter_type):
            logger.debug("reactive_method_found", method=method.name, type_id=parameter_type, position="parameter")
            return True

    return False


def find_reactive_methods(
    methods: Iterable[MethodSignature],
    registry: WrapperRegistry,
) -> list[MethodSignature]:
    """
    Collect every method that uses a reactive wrapper type.

    Unlike is_reactive(), all methods are scanned.

    Returns:
        Matching methods in input order (empty if the registry is unavailable)
    """
    _require_inputs(methods, getattr(registry, "supports", None))

    if not registry.is_available():
        logger.debug("registry_unavailable")
        return []

    return [method for method in methods if uses_wrapper(method, registry.supports)]


def is_reactive_repository(
    interface: type,
    registry: WrapperRegistry | None = None,
    include_inherited: bool | None = None,
) -> bool:
    """
    Check whether a repository interface class uses reactive wrapper types.

    The registry's availability is checked before the class is introspected.

    Args:
        interface: Repository interface class
        registry: Wrapper registry (default: environment-configured registry)
        include_inherited: Include base class methods (default: from settings)

    Raises:
        InvalidInterfaceError: interface is None or not a class
    """
    return ReactiveDetector(registry, include_inherited).is_reactive(interface)


def detect_repository_type(
    interface: type,
    registry: WrapperRegistry | None = None,
    include_inherited: bool | None = None,
) -> RepositoryType:
    """Classify a repository interface as REACTIVE or IMPERATIVE."""
    return ReactiveDetector(registry, include_inherited).repository_type(interface)


class ReactiveDetector:
    """
    Detector bound to one wrapper registry.

    Holds no state besides the injected registry, so one instance can be
    shared across threads.
    """

    def __init__(
        self,
        registry: WrapperRegistry | None = None,
        include_inherited: bool | None = None,
    ) -> None:
        self.registry = registry if registry is not None else get_default_registry()
        if include_inherited is None:
            from codegraph_reactive.config import load_settings

            include_inherited = load_settings().include_inherited
        self.include_inherited = include_inherited

    def is_reactive(self, interface: type) -> bool:
        _require_interface(interface)

        if not self.registry.is_available():
            logger.debug("registry_unavailable", interface=interface.__qualname__)
            return False

        return is_reactive(self.signatures(interface), True, self.registry.supports)

    def repository_type(self, interface: type) -> RepositoryType:
        repository_type = RepositoryType.of(self.is_reactive(interface))
        logger.info(
            "repository_type_detected",
            interface=f"{interface.__module__}.{interface.__qualname__}",
            repository_type=repository_type.value,
        )
        return repository_type

    def reactive_methods(self, interface: type) -> list[MethodSignature]:
        _require_interface(interface)
        return find_reactive_methods(self.signatures(interface), self.registry)

    def signatures(self, interface: type) -> list[MethodSignature]:
        return collect_signatures(interface, include_inherited=self.include_inherited)


def _require_inputs(methods: object, supports: object) -> None:
    if methods is None:
        raise InvalidInterfaceError("Method signatures must not be None")
    if not callable(supports):
        raise InvalidInterfaceError("Wrapper support check must be callable", supports=repr(supports))


def _require_interface(interface: object) -> None:
    if interface is None or not isinstance(interface, type):
        raise InvalidInterfaceError("Interface must be a class", interface=repr(interface))
