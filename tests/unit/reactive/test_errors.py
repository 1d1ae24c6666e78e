"""
Unit Tests: Error hierarchy
"""

import pytest

from codegraph_reactive import (
    ConfigurationError,
    IntrospectionError,
    InvalidInterfaceError,
    ReactiveError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error,code",
    [
        (ValidationError("bad input"), "VALIDATION_ERROR"),
        (InvalidInterfaceError("bad interface"), "INVALID_INTERFACE"),
        (IntrospectionError("cannot parse"), "INTROSPECTION_ERROR"),
        (ConfigurationError("unknown library"), "CONFIGURATION_ERROR"),
    ],
)
def test_codes(error, code):
    assert isinstance(error, ReactiveError)
    assert error.code == code
    assert str(error).endswith(error.message)


def test_invalid_interface_is_validation_error():
    assert issubclass(InvalidInterfaceError, ValidationError)


def test_context_is_kept():
    error = IntrospectionError("Class not found", class_name="UserRepository", filename="repos.py")

    assert error.context == {"class_name": "UserRepository", "filename": "repos.py"}
    assert str(error) == "[INTROSPECTION_ERROR] Class not found"
    assert "class_name='UserRepository'" in repr(error)
