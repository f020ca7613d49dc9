from typing import Generic, Protocol, TypeVar

import pytest

from bean_introspection import GenericIndexMismatchError, resolve_for_interface, resolve_for_superclass
from test_app.domain import Character, Identifiable

T = TypeVar("T")
U = TypeVar("U")


class Repository(Generic[T]):
    pass


class CharacterRepository(Repository[Character]):
    pass


class CachedCharacterRepository(CharacterRepository):
    pass


class Pair(Generic[T, U]):
    pass


class NamedList(Pair[str, list[int]]):
    pass


class HalfBound(Pair[str, U]):
    pass


class Plain:
    pass


class Converter(Protocol[T, U]):
    def convert(self, value: T) -> U:
        ...


class Loader(Protocol[T]):
    def load(self) -> T:
        ...


class Service:
    pass


class IntToStr(Service, Converter[int, str], Loader[Character]):
    pass


class StrictIntToStr(IntToStr):
    pass


class CharacterLoader(Loader[Character], Converter[int, str]):
    pass


class StringConverter(Converter[str, str], Protocol):
    pass


@pytest.mark.unit
class TestResolveForSuperclass:
    def test_direct_binding(self, generics):
        assert generics.resolve_for_superclass(CharacterRepository, 0) is Character

    def test_binding_found_on_ancestor(self, generics):
        assert generics.resolve_for_superclass(CachedCharacterRepository, 0) is Character

    def test_index_out_of_range_raises(self, generics):
        with pytest.raises(GenericIndexMismatchError) as exc_info:
            generics.resolve_for_superclass(CharacterRepository, 1)

        assert exc_info.value.arg_count == 1
        assert exc_info.value.arg_index == 1
        assert exc_info.value.type_name == "CharacterRepository"

    def test_index_out_of_range_in_safe_mode(self, generics):
        assert generics.resolve_for_superclass(CharacterRepository, 1, safe=True) is None

    def test_negative_index_is_out_of_range(self, generics):
        with pytest.raises(GenericIndexMismatchError):
            generics.resolve_for_superclass(CharacterRepository, -1)

    def test_parameterized_argument_resolves_to_raw_class(self, generics):
        assert generics.resolve_for_superclass(NamedList, 0) is str
        assert generics.resolve_for_superclass(NamedList, 1) is list

    def test_unbound_parameter_is_returned_as_is(self, generics):
        assert generics.resolve_for_superclass(HalfBound, 1) is U

    def test_no_parameterized_supertype(self, generics):
        assert generics.resolve_for_superclass(Plain, 0) is None
        assert generics.resolve_for_superclass(Repository, 0) is None

    def test_interfaces_are_not_superclasses(self, generics):
        assert generics.resolve_for_superclass(IntToStr, 0) is None
        assert generics.resolve_for_superclass(Character, 0) is None


@pytest.mark.unit
class TestResolveForInterface:
    def test_first_interface_by_default(self, generics):
        assert generics.resolve_for_interface(IntToStr) is int

    def test_specific_interface(self, generics):
        assert generics.resolve_for_interface(IntToStr, Loader, 0) is Character
        assert generics.resolve_for_interface(IntToStr, Converter, 1) is str

    def test_index_from_raw_interface(self, generics):
        def output_index(raw):
            return 1 if raw is Converter else 0

        assert generics.resolve_for_interface(IntToStr, arg_index=output_index) is str
        assert generics.resolve_for_interface(IntToStr, Loader, output_index) is Character

    def test_index_function_receives_raw_class(self, generics):
        seen = []

        def record(raw):
            seen.append(raw)
            return 0

        generics.resolve_for_interface(CharacterLoader, arg_index=record)

        assert seen == [Loader]

    def test_searches_ancestors(self, generics):
        assert generics.resolve_for_interface(StrictIntToStr, Loader) is Character

    def test_index_out_of_range_raises(self, generics):
        with pytest.raises(GenericIndexMismatchError) as exc_info:
            generics.resolve_for_interface(IntToStr, Loader, 1)

        assert exc_info.value.arg_count == 1

    def test_safe_mode_moves_on_to_next_interface(self, generics):
        assert generics.resolve_for_interface(CharacterLoader, arg_index=1, safe=True) is str

    def test_safe_mode_without_match(self, generics):
        assert generics.resolve_for_interface(IntToStr, Loader, 3, safe=True) is None

    def test_unmatched_interface_filter(self, generics):
        assert generics.resolve_for_interface(CharacterRepository, Loader) is None
        assert generics.resolve_for_interface(Plain) is None

    def test_protocol_record(self, generics):
        assert generics.resolve_for_interface(Character, Identifiable) is int

    def test_sub_interface(self, generics):
        assert generics.resolve_for_interface(StringConverter, Converter, 1) is str


@pytest.mark.unit
class TestModuleHelpers:
    def test_helpers_use_global_resolver(self):
        assert resolve_for_superclass(CharacterRepository, 0) is Character
        assert resolve_for_interface(IntToStr, Loader) is Character
