"""
Type and field descriptors.

A ``TypeDescriptor`` is built once per Python class and indexed by the
``TypeRegistry``. It exposes the class's single supertype, its implemented
interfaces, the parameterized forms of those bases and the fields declared
at that level only. Hierarchy walks elsewhere in the package follow these
links instead of re-reading ``__bases__`` and ``__annotations__`` each time.
"""

import dataclasses
import inspect
import logging
import sys
import threading
import types
import typing
from typing import Any, ClassVar, Dict, Iterator, Optional, Tuple, Union

from django.db import models
from django.utils.functional import cached_property

from ..config_proxy import get_setting

logger = logging.getLogger(__name__)

ATTRIBUTES_ATTR = "__bean_attributes__"

_NON_ORDERABLE_TYPES = (dict, set, frozenset, complex, type(None))
_NON_ORDERABLE_MODEL_FIELDS = ("JSONField", "BinaryField")
_IGNORED_BASES = (object, typing.Generic, typing.Protocol)
_IGNORED_SLOTS = ("__dict__", "__weakref__")


def _is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


def _unwrap_value_type(value_type: Any) -> Any:
    """Strip ``Annotated`` and ``Optional`` wrappers from an annotation."""
    origin = typing.get_origin(value_type)
    if origin is typing.Annotated:
        return _unwrap_value_type(typing.get_args(value_type)[0])
    if origin in (Union, types.UnionType):
        members = [arg for arg in typing.get_args(value_type) if arg is not type(None)]
        if len(members) == 1:
            return _unwrap_value_type(members[0])
        return value_type
    if isinstance(origin, type):
        return origin
    return value_type


def is_orderable_type(value_type: Any) -> bool:
    """Return True when values of ``value_type`` support natural ordering."""
    value_type = _unwrap_value_type(value_type)
    if value_type is Any or not isinstance(value_type, type):
        return False
    if issubclass(value_type, _NON_ORDERABLE_TYPES):
        return False
    return getattr(value_type, "__lt__", object.__lt__) is not object.__lt__


def _is_orderable_model_field(model_field: models.Field) -> bool:
    if model_field.is_relation:
        return False
    return model_field.get_internal_type() not in _NON_ORDERABLE_MODEL_FIELDS


def _is_class_var(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is ClassVar or typing.get_origin(hint) is ClassVar


def _is_init_var(hint: Any) -> bool:
    return hint is dataclasses.InitVar or isinstance(hint, dataclasses.InitVar)


def _annotation_metadata(hint: Any) -> Tuple[Any, ...]:
    if typing.get_origin(hint) is typing.Annotated:
        return tuple(hint.__metadata__)
    return ()


def _own_hints(cls: type) -> Dict[str, Any]:
    """
    Return the annotations declared on ``cls`` itself, resolved when possible.

    When the class's hints cannot be resolved together, each annotation is
    evaluated on its own; only the ones that fail stay in their raw form.
    """
    try:
        annotations = inspect.get_annotations(cls)
    except NameError as exc:
        logger.debug("Could not read annotations of %s: %s", cls.__qualname__, exc)
        return {}
    if not annotations:
        return {}
    try:
        resolved = typing.get_type_hints(cls, include_extras=True)
    except Exception as exc:
        logger.debug("Could not resolve annotations of %s: %s", cls.__qualname__, exc)
        return {
            name: _resolve_hint(cls, name, hint) for name, hint in annotations.items()
        }
    return {name: resolved.get(name, hint) for name, hint in annotations.items()}


def _resolve_hint(cls: type, name: str, hint: Any) -> Any:
    """Evaluate one string annotation in the namespaces of ``cls``."""
    if not isinstance(hint, str):
        return hint
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        return eval(hint, globalns, dict(vars(cls)))
    except Exception as exc:
        logger.debug(
            "Leaving annotation %s.%s unresolved: %s", cls.__qualname__, name, exc
        )
        return hint


def _own_slots(cls: type) -> Tuple[str, ...]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return tuple(
        name
        for name in slots
        if name not in _IGNORED_SLOTS and not name.startswith("__")
    )


@dataclasses.dataclass(frozen=True, eq=False)
class FieldDescriptor:
    """A named field declared at one level of a class hierarchy."""

    name: str
    declaring_type: "TypeDescriptor"
    value_type: Any = None
    orderable: bool = False
    attributes: Tuple[Any, ...] = ()
    model_field: Optional[models.Field] = None

    def _check_instance(self, instance: Any) -> None:
        if not isinstance(instance, self.declaring_type.python_type):
            raise TypeError(
                f"{type(instance).__qualname__} instance has no field "
                f"'{self.name}' declared by {self.declaring_type.name}"
            )

    def get(self, instance: Any) -> Any:
        """Read the field's value on ``instance``."""
        self._check_instance(instance)
        return getattr(instance, self.name)

    def set(self, instance: Any, value: Any) -> None:
        """Write the field's value on ``instance``."""
        self._check_instance(instance)
        setattr(instance, self.name, value)

    def __repr__(self) -> str:
        return f"<FieldDescriptor {self.declaring_type.name}.{self.name}>"


class TypeDescriptor:
    """
    Immutable handle on a Python class and its position in the hierarchy.

    The supertype is the next class in the MRO that is neither ``object``,
    ``typing.Generic`` nor a Protocol. Every other direct base (Protocols
    included) is an interface, so ``class Repo(Base[Item], Sized)`` has
    ``Base`` as its supertype and ``Sized`` as an interface.
    """

    def __init__(self, python_type: type, registry: "TypeRegistry"):
        self.python_type = python_type
        self._registry = registry
        self.declared_fields: Dict[str, FieldDescriptor] = self._build_declared_fields()

    @property
    def name(self) -> str:
        return self.python_type.__qualname__

    @property
    def is_model(self) -> bool:
        return "_meta" in self.python_type.__dict__ and issubclass(
            self.python_type, models.Model
        )

    @cached_property
    def _lineage(self) -> Tuple[type, ...]:
        """This class followed by its non-Protocol ancestors in MRO order."""
        cls = self.python_type
        return (cls,) + tuple(
            base
            for base in cls.__mro__[1:]
            if base not in _IGNORED_BASES and not _is_protocol(base)
        )

    @cached_property
    def _supertype_class(self) -> Optional[type]:
        lineage = self._lineage
        return lineage[1] if len(lineage) > 1 else None

    @cached_property
    def supertype(self) -> Optional["TypeDescriptor"]:
        base = self._supertype_class
        return self._registry.describe(base) if base is not None else None

    @cached_property
    def interfaces(self) -> Tuple["TypeDescriptor", ...]:
        return tuple(
            self._registry.describe(base)
            for base in self.python_type.__bases__
            if base not in _IGNORED_BASES and base is not self._supertype_class
        )

    @cached_property
    def _orig_bases(self) -> Tuple[Any, ...]:
        return tuple(
            self.python_type.__dict__.get("__orig_bases__", self.python_type.__bases__)
        )

    @cached_property
    def generic_supertype(self) -> Optional[Any]:
        """The supertype as written in the class statement, e.g. ``Base[Item]``."""
        if self._supertype_class is None:
            return None
        for base in self._orig_bases:
            if (typing.get_origin(base) or base) is self._supertype_class:
                return base
        return self._supertype_class

    @cached_property
    def generic_interfaces(self) -> Tuple[Any, ...]:
        """The interfaces as written in the class statement, in declaration order."""
        interface_classes = {descriptor.python_type for descriptor in self.interfaces}
        return tuple(
            base
            for base in self._orig_bases
            if (typing.get_origin(base) or base) in interface_classes
        )

    @property
    def attributes(self) -> Tuple[Any, ...]:
        """Attribute instances attached to this level only."""
        return tuple(self.python_type.__dict__.get(ATTRIBUTES_ATTR, ()))

    def ancestry(self) -> Iterator["TypeDescriptor"]:
        """
        Yield this descriptor then each ancestor in method resolution order.

        Every non-Protocol class of the MRO is visited, so a mixin listed
        before the main base does not hide that base's fields.
        """
        for cls in self._lineage:
            yield self._registry.describe(cls)

    def _build_declared_fields(self) -> Dict[str, FieldDescriptor]:
        cls = self.python_type
        include_private = get_setting("field_settings.include_private_fields", True)
        include_slots = get_setting("field_settings.include_slots", True)
        hints = _own_hints(cls)
        fields: Dict[str, FieldDescriptor] = {}

        def add(name: str, **kwargs: Any) -> None:
            if not include_private and name.startswith("_"):
                return
            fields[name] = FieldDescriptor(name=name, declaring_type=self, **kwargs)

        if self.is_model:
            opts = cls._meta
            for model_field in [*opts.local_fields, *opts.local_many_to_many]:
                hint = hints.get(model_field.name)
                add(
                    model_field.name,
                    value_type=hint,
                    orderable=_is_orderable_model_field(model_field),
                    attributes=_annotation_metadata(hint),
                    model_field=model_field,
                )

        for name, hint in hints.items():
            if name in fields or _is_class_var(hint) or _is_init_var(hint):
                continue
            add(
                name,
                value_type=hint,
                orderable=is_orderable_type(hint),
                attributes=_annotation_metadata(hint),
            )

        if include_slots:
            for name in _own_slots(cls):
                if name not in fields:
                    add(name)

        return fields

    def __repr__(self) -> str:
        return f"<TypeDescriptor {self.name}>"


class TypeRegistry:
    """
    Index of type descriptors keyed by class.

    Each class is described once; the same descriptor object is returned
    for every later lookup.
    """

    def __init__(self):
        self._descriptors: Dict[type, TypeDescriptor] = {}
        self._lock = threading.RLock()

    def describe(self, python_type: Union[type, TypeDescriptor]) -> TypeDescriptor:
        if isinstance(python_type, TypeDescriptor):
            return python_type
        if not isinstance(python_type, type):
            raise TypeError(f"Expected a class, got {python_type!r}")
        with self._lock:
            descriptor = self._descriptors.get(python_type)
            if descriptor is None:
                descriptor = TypeDescriptor(python_type, self)
                self._descriptors[python_type] = descriptor
                logger.debug("Described type %s", descriptor.name)
            return descriptor

    def __contains__(self, python_type: type) -> bool:
        with self._lock:
            return python_type in self._descriptors


# Global type registry instance
type_registry = TypeRegistry()


def describe(python_type: Union[type, TypeDescriptor]) -> TypeDescriptor:
    """Describe a class using the global registry."""
    return type_registry.describe(python_type)
