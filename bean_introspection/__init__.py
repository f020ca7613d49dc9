"""
Runtime introspection helpers for Python classes and Django models.

This package locates fields across class hierarchies, builds multi-key
comparators, recovers generic arguments bound by subclasses and collects
attribute metadata. The module-level functions below use the process-wide
instances; build your own ``BeanMetadataCache`` or ``TypeRegistry`` for an
isolated context.
"""

from typing import Any, List, Optional, Sequence, Tuple, TypeVar

from .core import (
    AttributeRecord,
    AttributeScanner,
    BeanComparator,
    BeanMetadata,
    BeanMetadataCache,
    ComparatorFactory,
    FieldDescriptor,
    FieldResolver,
    FieldWriteResult,
    GenericArgumentResolver,
    SortKey,
    TypeDescriptor,
    TypeRegistry,
    are_equal,
    attribute_scanner,
    attributes,
    bean_cache,
    comparator_factory,
    compare,
    describe,
    generic_resolver,
    type_registry,
)
from .core.generics import ArgIndex
from .exceptions import (
    FieldAccessError,
    FieldNotFoundError,
    FieldWriteError,
    GenericIndexMismatchError,
    IntrospectionError,
)

__version__ = "0.1.0"

__all__ = [
    "AttributeRecord",
    "AttributeScanner",
    "BeanComparator",
    "BeanMetadata",
    "BeanMetadataCache",
    "ComparatorFactory",
    "FieldAccessError",
    "FieldDescriptor",
    "FieldNotFoundError",
    "FieldResolver",
    "FieldWriteError",
    "FieldWriteResult",
    "GenericArgumentResolver",
    "GenericIndexMismatchError",
    "IntrospectionError",
    "SortKey",
    "TypeDescriptor",
    "TypeRegistry",
    "are_equal",
    "attributes",
    "bean_cache",
    "build_comparator",
    "collect_field_attributes",
    "collect_type_attributes",
    "comparator_from_extractors",
    "compare",
    "describe",
    "get_all_fields",
    "get_comparator",
    "get_field",
    "get_field_value",
    "resolve_for_interface",
    "resolve_for_superclass",
    "set_field_value",
    "try_set_field_value",
    "type_registry",
]

T = TypeVar("T")


# Convenience functions
def get_field(python_type: Optional[type], name: Optional[str]) -> Optional[FieldDescriptor]:
    """Find a field on a class or its supertypes using the global cache."""
    return bean_cache.get_field(python_type, name)


def get_all_fields(python_type: type) -> List[Tuple[str, FieldDescriptor]]:
    """List every field of a class using the global cache."""
    return bean_cache.get_all_fields(python_type)


def get_field_value(instance: Any, name: Optional[str]) -> Any:
    """Read a field value, or None on any failure."""
    return bean_cache.get_field_value(instance, name)


def set_field_value(instance: T, name: Optional[str], value: Any) -> T:
    """Write a field value, raising FieldAccessError on failure."""
    return bean_cache.set_field_value(instance, name, value)


def try_set_field_value(instance: Any, name: Optional[str], value: Any) -> FieldWriteResult:
    """Write a field value, reporting failure in the result."""
    return bean_cache.try_set_field_value(instance, name, value)


def build_comparator(python_type: type, sort_keys: Sequence[Any]) -> BeanComparator:
    """Build a comparator over a class from sort keys."""
    return comparator_factory.build_comparator(python_type, sort_keys)


def get_comparator(python_type: type, *fields: str, ascending: bool = True) -> BeanComparator:
    """Build a comparator sorting every named field in one direction."""
    return comparator_factory.get_comparator(python_type, *fields, ascending=ascending)


def comparator_from_extractors(sort_keys: Sequence[Any]) -> BeanComparator:
    """Build a comparator from value extractors."""
    return ComparatorFactory.comparator_from_extractors(sort_keys)


def resolve_for_superclass(python_type: type, arg_index: int, safe: bool = False) -> Any:
    """Resolve a generic argument bound on the supertype chain."""
    return generic_resolver.resolve_for_superclass(python_type, arg_index, safe)


def resolve_for_interface(
    python_type: type,
    interface: Optional[type] = None,
    arg_index: ArgIndex = 0,
    safe: bool = False,
) -> Any:
    """Resolve a generic argument bound by an implemented interface."""
    return generic_resolver.resolve_for_interface(python_type, interface, arg_index, safe)


def collect_type_attributes(python_type: type, kind: type) -> List[AttributeRecord]:
    """Collect class attributes of one kind, oldest ancestor first."""
    return attribute_scanner.collect_type_attributes(python_type, kind)


def collect_field_attributes(python_type: type, kind: type) -> List[AttributeRecord]:
    """Collect field attributes of one kind, the class's own fields first."""
    return attribute_scanner.collect_field_attributes(python_type, kind)
