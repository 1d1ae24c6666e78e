"""
Introspection Module

Method signature extraction from live classes (runtime) and from Python
source (AST).
"""

from codegraph_reactive.introspection.runtime import collect_signatures, load_interface
from codegraph_reactive.introspection.source import (
    SourceIntrospector,
    collect_source_signatures,
    scan_file,
    scan_source,
)

__all__ = [
    # Runtime
    "collect_signatures",
    "load_interface",
    # Source
    "SourceIntrospector",
    "collect_source_signatures",
    "scan_source",
    "scan_file",
]
