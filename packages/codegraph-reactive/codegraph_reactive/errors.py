"""
Standardized Error Handling for codegraph-reactive

Provides hierarchical exception classes with error codes and context.
"""

from typing import Any


class ReactiveError(Exception):
    """Base exception for all codegraph-reactive errors.

    Includes error code for programmatic handling and context for debugging.

    Example:
        raise ReactiveError(
            code="INTROSPECTION_ERROR",
            message="Class not found in source",
            class_name="UserRepository",
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def __repr__(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r}, {ctx_str})"


# ==============================================================================
# Validation Errors
# ==============================================================================


class ValidationError(ReactiveError):
    """Error in input validation."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="VALIDATION_ERROR", message=message, **context)


class InvalidInterfaceError(ValidationError):
    """Detector called with a missing or malformed interface."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, **context)
        self.code = "INVALID_INTERFACE"


# ==============================================================================
# Introspection Errors
# ==============================================================================


class IntrospectionError(ReactiveError):
    """Error while reading method metadata from a class or from source."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="INTROSPECTION_ERROR", message=message, **context)


# ==============================================================================
# Configuration Errors
# ==============================================================================


class ConfigurationError(ReactiveError):
    """Error in configuration."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="CONFIGURATION_ERROR", message=message, **context)


# ==============================================================================
# Exports
# ==============================================================================

__all__ = [
    # Base
    "ReactiveError",
    # Validation
    "ValidationError",
    "InvalidInterfaceError",
    # Introspection
    "IntrospectionError",
    # Configuration
    "ConfigurationError",
]
