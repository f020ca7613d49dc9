"""
Per-type field tables and field value access.

``BeanMetadataCache`` keeps one ``BeanMetadata`` entry per class, populated
on first lookup and kept for the lifetime of the cache. A single lock guards
every lookup and every change to an entry's field map, whatever the type.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, TypeVar, Union

from ..config_proxy import get_setting
from ..exceptions import FieldAccessError, FieldNotFoundError, FieldWriteError
from .descriptors import FieldDescriptor, TypeDescriptor
from .fields import FieldResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


def log_swallowed(message: str, *args: Any) -> None:
    """Log a read failure that is reported to the caller as ``None``."""
    if get_setting("logging_settings.log_swallowed_errors", True):
        logger.debug(message, *args)


def compare(c1: Any, c2: Any) -> int:
    """
    Compare two values of the same type, ``None`` sorting lowest.

    Returns -1, 0 or 1.
    """
    if c1 is None:
        return 0 if c2 is None else -1
    if c2 is None:
        return 1
    if c1 < c2:
        return -1
    if c2 < c1:
        return 1
    return 0


def are_equal(b1: Any, b2: Any) -> bool:
    """Null-safe equality: two ``None`` are equal, one ``None`` is not."""
    if b1 is not None and b2 is not None:
        return b1 == b2
    return b1 is None and b2 is None


@dataclass
class BeanMetadata:
    """Cached field table of one class."""

    descriptor: TypeDescriptor
    fields: Dict[str, FieldDescriptor] = field(default_factory=dict)
    all_fields_loaded: bool = False


@dataclass(frozen=True)
class FieldWriteResult:
    """Outcome of a field write that reports failure instead of raising."""

    success: bool
    instance: Any
    error: Optional[FieldAccessError] = None

    def __bool__(self) -> bool:
        return self.success


class BeanMetadataCache:
    """
    Cache of per-class field tables.
    """

    compare = staticmethod(compare)
    are_equal = staticmethod(are_equal)

    def __init__(self, resolver: Optional[FieldResolver] = None):
        self.resolver = resolver if resolver is not None else FieldResolver()
        self._entries: Dict[type, BeanMetadata] = {}
        self._lock = threading.RLock()

    def get(self, python_type: Union[type, TypeDescriptor]) -> BeanMetadata:
        """Return the entry for ``python_type``, creating it on first use."""
        descriptor = self.resolver.registry.describe(python_type)
        with self._lock:
            entry = self._entries.get(descriptor.python_type)
            if entry is None:
                entry = BeanMetadata(descriptor=descriptor)
                self._entries[descriptor.python_type] = entry
            return entry

    def get_field(
        self, python_type: Union[type, TypeDescriptor, None], name: Optional[str]
    ) -> Optional[FieldDescriptor]:
        """
        Find a field on ``python_type`` or its supertypes.

        Hits are kept in the type's entry so later lookups return the same
        descriptor without walking the hierarchy again.
        """
        if python_type is None or name is None:
            return None
        with self._lock:
            entry = self.get(python_type)
            result = entry.fields.get(name)
            if result is None and not entry.all_fields_loaded:
                result = self.resolver.resolve_field(entry.descriptor, name)
                if result is not None:
                    entry.fields[name] = result
            return result

    def get_all_fields(
        self, python_type: Union[type, TypeDescriptor]
    ) -> List[Tuple[str, FieldDescriptor]]:
        """
        Return every field of ``python_type``, base-class fields first.

        The first call replaces the lazily built table with the full one;
        a subclass field shadowing a base-class one keeps the base position.
        """
        with self._lock:
            entry = self.get(python_type)
            if not entry.all_fields_loaded:
                entry.fields = dict(self.resolver.load_all_fields(entry.descriptor))
                entry.all_fields_loaded = True
                logger.debug(
                    "Loaded %d fields for %s", len(entry.fields), entry.descriptor.name
                )
            return list(entry.fields.items())

    def get_field_value(self, instance: Any, name: Optional[str]) -> Any:
        """Read a field value; any failure yields ``None``."""
        if instance is None or name is None:
            return None
        try:
            result = self.get_field(type(instance), name)
            if result is None:
                log_swallowed(
                    "No field '%s' on %s", name, type(instance).__qualname__
                )
                return None
            return result.get(instance)
        except Exception as exc:
            log_swallowed(
                "Could not read '%s' on %s: %s", name, type(instance).__qualname__, exc
            )
            return None

    def set_field_value(self, instance: T, name: Optional[str], value: Any) -> T:
        """
        Write a field value and return ``instance``.

        Raises:
            FieldNotFoundError: no level of the hierarchy declares ``name``
            FieldWriteError: the attribute write itself failed
        """
        if instance is None or name is None:
            return instance
        type_name = type(instance).__qualname__
        target = self.get_field(type(instance), name)
        if target is None:
            raise FieldNotFoundError(type_name, name)
        try:
            target.set(instance, value)
        except Exception as exc:
            raise FieldWriteError(
                f"Could not write '{name}' on {type_name}: {exc}",
                type_name,
                name,
                value,
            ) from exc
        return instance

    def try_set_field_value(
        self, instance: Any, name: Optional[str], value: Any
    ) -> FieldWriteResult:
        """Write a field value, reporting failure in the returned result."""
        try:
            self.set_field_value(instance, name, value)
        except FieldAccessError as exc:
            return FieldWriteResult(success=False, instance=instance, error=exc)
        return FieldWriteResult(success=True, instance=instance)

    def __contains__(self, python_type: type) -> bool:
        with self._lock:
            return python_type in self._entries

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()


# Global metadata cache instance
bean_cache = BeanMetadataCache()
