"""
Field discovery across a class hierarchy.
"""

from typing import List, Optional, Tuple, Union

from .descriptors import FieldDescriptor, TypeDescriptor, TypeRegistry, type_registry


class FieldResolver:
    """
    Locates fields declared on a class or any of its supertypes.

    ``resolve_field`` searches from the most-derived class upward and stops
    at the first match. ``load_all_fields`` walks the other way, emitting
    base-class fields before derived ones, so a name redeclared by a subclass
    appears twice in its result.
    """

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self.registry = registry if registry is not None else type_registry

    def resolve_field(
        self, python_type: Union[type, TypeDescriptor], name: str
    ) -> Optional[FieldDescriptor]:
        for descriptor in self.registry.describe(python_type).ancestry():
            field = descriptor.declared_fields.get(name)
            if field is not None:
                return field
        return None

    def load_all_fields(
        self, python_type: Union[type, TypeDescriptor, None]
    ) -> List[Tuple[str, FieldDescriptor]]:
        if python_type is None:
            return []
        levels = list(self.registry.describe(python_type).ancestry())
        return [
            item
            for descriptor in reversed(levels)
            for item in descriptor.declared_fields.items()
        ]
