"""
Bean Introspection Core Package.
"""

from .attributes import AttributeRecord, AttributeScanner, attribute_scanner, attributes
from .comparators import BeanComparator, ComparatorFactory, SortKey, comparator_factory
from .descriptors import (
    FieldDescriptor,
    TypeDescriptor,
    TypeRegistry,
    describe,
    is_orderable_type,
    type_registry,
)
from .fields import FieldResolver
from .generics import GenericArgumentResolver, generic_resolver
from .metadata import (
    BeanMetadata,
    BeanMetadataCache,
    FieldWriteResult,
    are_equal,
    bean_cache,
    compare,
)

__all__ = [
    "AttributeRecord",
    "AttributeScanner",
    "BeanComparator",
    "BeanMetadata",
    "BeanMetadataCache",
    "ComparatorFactory",
    "FieldDescriptor",
    "FieldResolver",
    "FieldWriteResult",
    "GenericArgumentResolver",
    "SortKey",
    "TypeDescriptor",
    "TypeRegistry",
    "are_equal",
    "attribute_scanner",
    "attributes",
    "bean_cache",
    "comparator_factory",
    "compare",
    "describe",
    "generic_resolver",
    "is_orderable_type",
    "type_registry",
]
