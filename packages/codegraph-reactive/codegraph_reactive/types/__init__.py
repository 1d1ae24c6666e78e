"""
Types Module

Domain types shared by introspection, the registry and the detector.
"""

from codegraph_reactive.types.enums import ReactiveLibrary, RepositoryType
from codegraph_reactive.types.normalizer import (
    DEFAULT_ALIASES,
    NormalizationConfig,
    TypeNormalizer,
    default_normalizer,
)
from codegraph_reactive.types.signature import ANY_TYPE, MethodSignature, TypeId

__all__ = [
    # Signature
    "MethodSignature",
    "TypeId",
    "ANY_TYPE",
    # Enums
    "RepositoryType",
    "ReactiveLibrary",
    # Normalizer
    "TypeNormalizer",
    "NormalizationConfig",
    "DEFAULT_ALIASES",
    "default_normalizer",
]
