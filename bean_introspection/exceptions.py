"""
Custom exceptions for bean introspection.

Lookup misses (unknown fields, missing attributes, unparameterized
hierarchies) are reported as ``None`` or empty results and never raised.
Only out-of-range generic argument requests and field writes raise.
"""

from typing import Any, Optional


class IntrospectionError(Exception):
    """Base exception for introspection errors."""

    def __init__(self, message: str, type_name: Optional[str] = None):
        self.type_name = type_name
        super().__init__(message)


class GenericIndexMismatchError(IntrospectionError):
    """Raised when a generic argument index exceeds the declared arguments."""

    def __init__(
        self,
        arg_count: int,
        arg_index: int,
        type_name: Optional[str] = None,
    ):
        self.arg_count = arg_count
        self.arg_index = arg_index
        super().__init__(
            f"Type declares only {arg_count} generic arguments: "
            f"requested index {arg_index} does not exist",
            type_name,
        )


class FieldAccessError(IntrospectionError):
    """Raised when a field value cannot be written."""

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        self.field_name = field_name
        super().__init__(message, type_name)


class FieldNotFoundError(FieldAccessError):
    """Raised when writing to a field that no level of the hierarchy declares."""

    def __init__(self, type_name: Optional[str] = None, field_name: Optional[str] = None):
        super().__init__(
            f"Field '{field_name}' not found on '{type_name}'",
            type_name,
            field_name,
        )


class FieldWriteError(FieldAccessError):
    """Raised when the underlying attribute write fails."""

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        self.value = value
        super().__init__(message, type_name, field_name)
