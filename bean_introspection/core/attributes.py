"""
Attribute metadata attached to classes and fields.

Class attributes are attached with the ``attributes`` decorator and belong
to the decorated class only. Field attributes are the metadata of
``typing.Annotated`` annotations::

    @attributes(Table("characters"))
    class Character:
        name: Annotated[str, Column("char_name")]
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar, Union

from .descriptors import ATTRIBUTES_ATTR, FieldDescriptor, TypeDescriptor, TypeRegistry, type_registry

A = TypeVar("A")


def attributes(*instances: Any) -> Callable[[type], type]:
    """Class decorator attaching attribute instances to the decorated class."""

    def decorator(cls: type) -> type:
        own = tuple(cls.__dict__.get(ATTRIBUTES_ATTR, ()))
        setattr(cls, ATTRIBUTES_ATTR, own + instances)
        return cls

    return decorator


@dataclass(frozen=True)
class AttributeRecord:
    """An attribute instance and the class or field it was found on."""

    attribute: Any
    declared_on: Union[TypeDescriptor, FieldDescriptor]

    @property
    def field(self) -> Optional[FieldDescriptor]:
        return self.declared_on if isinstance(self.declared_on, FieldDescriptor) else None


def _first_of_kind(candidates: Iterable[Any], kind: Type[A]) -> Optional[A]:
    return next((candidate for candidate in candidates if isinstance(candidate, kind)), None)


class AttributeScanner:
    """Collects attributes of one kind along a class's supertype chain."""

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self.registry = registry if registry is not None else type_registry

    def collect_type_attributes(
        self, python_type: Union[type, TypeDescriptor], kind: Type[A]
    ) -> List[AttributeRecord]:
        """
        Return at most one ``kind`` attribute per level, oldest ancestor first.
        """
        records: deque = deque()
        for descriptor in self.registry.describe(python_type).ancestry():
            attribute = _first_of_kind(descriptor.attributes, kind)
            if attribute is not None:
                records.appendleft(AttributeRecord(attribute, descriptor))
        return list(records)

    def collect_field_attributes(
        self, python_type: Union[type, TypeDescriptor], kind: Type[A]
    ) -> List[AttributeRecord]:
        """
        Return the fields carrying a ``kind`` attribute, the given class's own
        fields first and then each ancestor's.
        """
        records = []
        for descriptor in self.registry.describe(python_type).ancestry():
            for field in descriptor.declared_fields.values():
                attribute = _first_of_kind(field.attributes, kind)
                if attribute is not None:
                    records.append(AttributeRecord(attribute, field))
        return records


# Global attribute scanner instance
attribute_scanner = AttributeScanner()
