"""
Runtime Introspection

Builds MethodSignature sequences from an imported interface class
(typing.Protocol, abc.ABC or a plain class) using inspect and
typing.get_type_hints.

Rules:
- Methods of base classes are included (first definition of a name wins)
- Dunder methods, properties and non-callables are skipped; a property or
  attribute still hides a base class method of the same name
- Decorated methods are unwrapped through `__wrapped__`
- The receiver of instance/class methods is not a parameter
- `async def` returns Coroutine, async generators return AsyncGenerator
"""

import abc
import builtins
import importlib
import inspect
import typing
from typing import Any

from codegraph_reactive.errors import IntrospectionError, InvalidInterfaceError
from codegraph_reactive.logging import get_logger
from codegraph_reactive.types.normalizer import TypeNormalizer, default_normalizer
from codegraph_reactive.types.signature import MethodSignature, TypeId

logger = get_logger(__name__)

COROUTINE_TYPE: TypeId = "collections.abc.Coroutine"
ASYNC_GENERATOR_TYPE: TypeId = "collections.abc.AsyncGenerator"
UNION_TYPE: TypeId = "typing.Union"

_SKIPPED_BASES: frozenset[Any] = frozenset({object, typing.Protocol, typing.Generic, abc.ABC})

_MISSING = object()


def collect_signatures(
    interface: type,
    include_inherited: bool = True,
    normalizer: TypeNormalizer | None = None,
) -> list[MethodSignature]:
    """
    Collect the method signatures declared by an interface class.

    Args:
        interface: Interface class
        include_inherited: Walk the MRO instead of the class itself only
        normalizer: Type identifier normalizer

    Returns:
        Signatures in MRO order, then declaration order

    Raises:
        InvalidInterfaceError: interface is None or not a class
    """
    if interface is None or not isinstance(interface, type):
        raise InvalidInterfaceError("Interface must be a class", interface=repr(interface))

    normalizer = normalizer or default_normalizer
    classes = interface.__mro__ if include_inherited else (interface,)

    seen: set[str] = set()
    signatures: list[MethodSignature] = []

    for klass in classes:
        if klass in _SKIPPED_BASES:
            continue

        for name, attr in vars(klass).items():
            if name in seen or _is_dunder(name):
                continue
            seen.add(name)

            func, has_receiver = _unwrap_method(attr)
            if func is None:
                continue

            signatures.append(_signature_of(name, func, has_receiver, klass, normalizer))

    return signatures


def load_interface(target: str) -> type:
    """
    Import an interface class from "package.module:ClassName".

    A dotted path without ":" is split at its last dot.

    Raises:
        IntrospectionError: Module or attribute cannot be loaded
        InvalidInterfaceError: Target is not a class
    """
    if ":" in target:
        module_name, _, attr_path = target.partition(":")
    else:
        module_name, _, attr_path = target.rpartition(".")

    if not module_name or not attr_path:
        raise IntrospectionError("Target must look like 'package.module:ClassName'", target=target)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise IntrospectionError(f"Cannot import module {module_name!r}: {e}", target=target) from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise IntrospectionError(f"{module_name!r} has no attribute {attr_path!r}", target=target) from e

    if not isinstance(obj, type):
        raise InvalidInterfaceError(f"{target!r} is not a class", target=target)

    return obj


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _unwrap_method(attr: Any) -> tuple[Any, bool]:
    """Return (function, has_receiver) or (None, False) for non-methods."""
    if isinstance(attr, staticmethod):
        return attr.__func__, False
    if isinstance(attr, classmethod):
        return attr.__func__, True
    if inspect.isfunction(attr):
        return attr, True
    return None, False


def _signature_of(
    name: str,
    func: Any,
    has_receiver: bool,
    klass: type,
    normalizer: TypeNormalizer,
) -> MethodSignature:
    # Decorated methods (functools.wraps) are described by the function they wrap
    func = inspect.unwrap(func)
    hints = _type_hints(func)
    signature = inspect.signature(func)

    params = list(signature.parameters.values())
    if has_receiver and params:
        params = params[1:]

    parameter_types = tuple(_annotation_id(_parameter_annotation(param, hints), func, normalizer) for param in params)

    if inspect.isasyncgenfunction(func):
        return_type = ASYNC_GENERATOR_TYPE
    elif inspect.iscoroutinefunction(func):
        return_type = COROUTINE_TYPE
    else:
        return_type = _annotation_id(hints.get("return", signature.return_annotation), func, normalizer)

    return MethodSignature(
        name=name,
        return_type=return_type,
        parameter_types=parameter_types,
        declaring_type=f"{klass.__module__}.{klass.__qualname__}",
    )


def _parameter_annotation(param: inspect.Parameter, hints: dict[str, Any]) -> Any:
    # Python 3.10 get_type_hints() wraps hints of `= None` parameters in Optional
    if param.default is None:
        return param.annotation
    return hints.get(param.name, param.annotation)


def _type_hints(func: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError, SyntaxError) as e:
        # Unresolvable forward reference: fall back to raw annotations
        logger.debug("type_hints_unresolved", function=func.__qualname__, error=str(e))
        return {}


def _annotation_id(annotation: Any, func: Any, normalizer: TypeNormalizer) -> TypeId:
    if isinstance(annotation, str):
        return _string_annotation_id(annotation, getattr(func, "__globals__", {}), normalizer)
    return normalizer.type_id(annotation)


def _string_annotation_id(text: str, namespace: dict[str, Any], normalizer: TypeNormalizer) -> TypeId:
    """Resolve the head name of a string annotation against module globals."""
    if _has_top_level_union(text):
        return UNION_TYPE

    head = text.split("[", 1)[0].strip()
    obj = _lookup(head, namespace)
    if obj is _MISSING:
        logger.debug("annotation_unresolved", annotation=text)
        return normalizer.normalize(head)
    if obj is typing.Annotated and "[" in text and text.rstrip().endswith("]"):
        return _string_annotation_id(_first_argument(text), namespace, normalizer)
    return normalizer.type_id(obj)


def _first_argument(text: str) -> str:
    """'Annotated[X[int], "meta"]' -> 'X[int]'"""
    body = text[text.index("[") + 1 : text.rindex("]")]
    depth = 0
    for i, char in enumerate(body):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == "," and depth == 0:
            return body[:i].strip()
    return body.strip()


def _has_top_level_union(text: str) -> bool:
    depth = 0
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == "|" and depth == 0:
            return True
    return False


def _lookup(dotted: str, namespace: dict[str, Any]) -> Any:
    head, *rest = dotted.split(".")
    obj = namespace.get(head, _MISSING)
    if obj is _MISSING:
        obj = getattr(builtins, head, _MISSING)

    for part in rest:
        if obj is _MISSING:
            break
        obj = getattr(obj, part, _MISSING)

    return obj
