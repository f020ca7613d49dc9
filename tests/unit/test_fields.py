from typing import Annotated, Any, ClassVar, Optional, Protocol

import pytest

from bean_introspection import FieldNotFoundError, SortKey, TypeRegistry
from bean_introspection.core.descriptors import is_orderable_type
from test_app.orders import Column, Order


class Base:
    id: int
    name: str
    _secret: str


class Middle(Base):
    level: int


class Leaf(Middle):
    name: str
    nickname: Optional[str]
    registry: ClassVar[list] = []


class Point:
    __slots__ = ("x", "y", "_cache")
    x: int


class Sized(Protocol):
    def size(self) -> int:
        ...


class Box(Base, Sized):
    width: float

    def size(self) -> int:
        return 1


class AuditMixin:
    audited: bool


class Entity:
    id: int


class Invoice(AuditMixin, Entity):
    total: int


@pytest.mark.unit
class TestResolveField:
    def test_finds_field_declared_on_ancestor(self, resolver):
        field = resolver.resolve_field(Leaf, "id")

        assert field is not None
        assert field.declaring_type.python_type is Base

    def test_unknown_name_is_none(self, resolver):
        assert resolver.resolve_field(Leaf, "missing") is None

    def test_most_derived_declaration_wins(self, resolver):
        assert resolver.resolve_field(Leaf, "name").declaring_type.python_type is Leaf
        assert resolver.resolve_field(Base, "name").declaring_type.python_type is Base

    def test_class_vars_are_not_fields(self, resolver):
        assert resolver.resolve_field(Leaf, "registry") is None

    def test_repeated_resolution_returns_same_descriptor(self, resolver):
        assert resolver.resolve_field(Leaf, "level") is resolver.resolve_field(Leaf, "level")


@pytest.mark.unit
class TestLoadAllFields:
    def test_base_fields_come_first(self, resolver):
        names = [name for name, _ in resolver.load_all_fields(Leaf)]

        assert names == ["id", "name", "_secret", "level", "name", "nickname"]

    def test_redeclared_name_is_listed_per_level(self, resolver):
        owners = [
            field.declaring_type.python_type
            for name, field in resolver.load_all_fields(Leaf)
            if name == "name"
        ]

        assert owners == [Base, Leaf]

    def test_folding_keeps_base_position_and_derived_field(self, resolver):
        table = dict(resolver.load_all_fields(Leaf))

        assert list(table) == ["id", "name", "_secret", "level", "nickname"]
        assert table["name"].declaring_type.python_type is Leaf
        assert table["name"] is resolver.resolve_field(Leaf, "name")

    def test_none_type_has_no_fields(self, resolver):
        assert resolver.load_all_fields(None) == []


@pytest.mark.unit
class TestTypeDescriptor:
    def test_describe_is_stable(self, registry):
        descriptor = registry.describe(Leaf)

        assert registry.describe(Leaf) is descriptor
        assert registry.describe(descriptor) is descriptor
        assert Leaf in registry

    def test_describe_rejects_instances(self, registry):
        with pytest.raises(TypeError):
            registry.describe(Leaf())

    def test_supertype_chain(self, registry):
        chain = [d.python_type for d in registry.describe(Leaf).ancestry()]

        assert chain == [Leaf, Middle, Base]

    def test_protocol_bases_are_interfaces(self, registry):
        descriptor = registry.describe(Box)

        assert descriptor.supertype.python_type is Base
        assert [i.python_type for i in descriptor.interfaces] == [Sized]
        assert registry.describe(Sized).supertype is None

    def test_slots_are_fields(self, registry):
        fields = registry.describe(Point).declared_fields

        assert list(fields) == ["x", "y", "_cache"]
        assert fields["x"].orderable is True
        assert fields["y"].orderable is False

    def test_private_fields_can_be_excluded(self, settings):
        settings.BEAN_INTROSPECTION = {"field_settings": {"include_private_fields": False}}

        fields = TypeRegistry().describe(Base).declared_fields

        assert list(fields) == ["id", "name"]

    def test_slots_can_be_ignored(self, settings):
        settings.BEAN_INTROSPECTION = {"field_settings": {"include_slots": False}}

        assert list(TypeRegistry().describe(Point).declared_fields) == ["x"]

    def test_field_rejects_foreign_instance(self, resolver):
        field = resolver.resolve_field(Leaf, "level")

        with pytest.raises(TypeError):
            field.get(Base())


@pytest.mark.unit
class TestOrderableTypes:
    @pytest.mark.parametrize(
        "value_type",
        [int, str, float, bool, tuple, list[int], Optional[str], Annotated[int, "meta"]],
    )
    def test_orderable(self, value_type):
        assert is_orderable_type(value_type) is True

    @pytest.mark.parametrize(
        "value_type",
        [dict, set, complex, object, Any, None, "int", Optional[dict], Sized],
    )
    def test_not_orderable(self, value_type):
        assert is_orderable_type(value_type) is False


@pytest.mark.unit
class TestMixinBases:
    def test_field_of_later_base_is_found(self, resolver):
        field = resolver.resolve_field(Invoice, "id")

        assert field is not None
        assert field.declaring_type.python_type is Entity

    def test_ancestry_follows_mro(self, registry):
        descriptor = registry.describe(Invoice)

        assert [d.python_type for d in descriptor.ancestry()] == [Invoice, AuditMixin, Entity]
        assert descriptor.supertype.python_type is AuditMixin
        assert [i.python_type for i in descriptor.interfaces] == [Entity]

    def test_all_fields_cover_every_base(self, resolver):
        names = [name for name, _ in resolver.load_all_fields(Invoice)]

        assert names == ["id", "audited", "total"]

    def test_values_of_later_base_are_accessible(self, cache):
        invoice = Invoice()
        invoice.id = 7

        assert cache.get_field_value(invoice, "id") == 7
        assert cache.set_field_value(invoice, "id", 8).id == 8
        with pytest.raises(FieldNotFoundError):
            cache.set_field_value(invoice, "missing", 1)


@pytest.mark.unit
class TestDeferredAnnotations:
    def test_resolvable_annotations_survive_an_unresolvable_one(self, registry):
        fields = registry.describe(Order).declared_fields

        assert fields["id"].orderable is True
        assert fields["id"].attributes == (Column("order_id"),)
        assert fields["reference"].value_type is str
        assert fields["reference"].orderable is True

    def test_unresolvable_annotation_stays_raw(self, registry):
        total = registry.describe(Order).declared_fields["total"]

        assert total.value_type == "Optional[Decimal]"
        assert total.orderable is False

    def test_class_vars_are_still_excluded(self, registry):
        assert list(registry.describe(Order).declared_fields) == ["id", "total", "reference"]

    def test_comparator_and_attributes_use_resolved_field(self, factory, scanner):
        comparator = factory.build_comparator(Order, [SortKey.asc("id"), SortKey.asc("total")])
        records = scanner.collect_field_attributes(Order, Column)

        assert len(comparator) == 1
        assert [(r.field.name, r.attribute.name) for r in records] == [("id", "order_id")]
