import pytest

from bean_introspection import (
    AttributeScanner,
    BeanMetadataCache,
    ComparatorFactory,
    FieldResolver,
    GenericArgumentResolver,
    TypeRegistry,
)
from bean_introspection.config_proxy import settings_proxy


@pytest.fixture(autouse=True)
def fresh_settings_proxy():
    """Settings overrides made by a test must not leak through the proxy memo."""
    settings_proxy.clear_cache()
    yield
    settings_proxy.clear_cache()


@pytest.fixture
def registry():
    return TypeRegistry()


@pytest.fixture
def resolver(registry):
    return FieldResolver(registry)


@pytest.fixture
def cache(resolver):
    return BeanMetadataCache(resolver)


@pytest.fixture
def factory(cache):
    return ComparatorFactory(cache)


@pytest.fixture
def generics(registry):
    return GenericArgumentResolver(registry)


@pytest.fixture
def scanner(registry):
    return AttributeScanner(registry)
