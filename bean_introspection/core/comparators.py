"""
Multi-key comparators built from field names or value extractors.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from django.utils.functional import cached_property

from .descriptors import TypeDescriptor
from .metadata import BeanMetadataCache, bean_cache, compare, log_swallowed

logger = logging.getLogger(__name__)

Extractor = Callable[[Any], Any]


@dataclass(frozen=True)
class SortKey:
    """Sort direction plus either a field name or a value extractor."""

    ascending: bool
    target: Union[str, Extractor]

    @classmethod
    def asc(cls, target: Union[str, Extractor]) -> "SortKey":
        return cls(True, target)

    @classmethod
    def desc(cls, target: Union[str, Extractor]) -> "SortKey":
        return cls(False, target)

    @property
    def is_field(self) -> bool:
        return isinstance(self.target, str)

    @classmethod
    def coerce(cls, value: Any) -> "SortKey":
        """
        Accept a ``SortKey``, an ``(ascending, target)`` pair, or a bare field
        name or extractor (ascending).
        """
        if isinstance(value, SortKey):
            return value
        if isinstance(value, tuple) and len(value) == 2:
            return cls(bool(value[0]), value[1])
        if isinstance(value, str) or callable(value):
            return cls(True, value)
        raise TypeError(f"Cannot build a sort key from {value!r}")


class BeanComparator:
    """
    ``cmp``-style comparator evaluating its keys left to right.

    Per key, ``None`` is the lowest value when ascending and the highest when
    descending. A key whose extraction or comparison fails counts as a tie.
    """

    def __init__(self, keys: Iterable[Tuple[bool, Extractor]]):
        self.keys: Tuple[Tuple[bool, Extractor], ...] = tuple(keys)

    def __call__(self, left: Any, right: Any) -> int:
        for ascending, extractor in self.keys:
            result = self._compare_key(ascending, extractor, left, right)
            if result != 0:
                return result
        return 0

    @staticmethod
    def _compare_key(ascending: bool, extractor: Extractor, left: Any, right: Any) -> int:
        try:
            c1 = extractor(left)
            c2 = extractor(right)
            if c1 is None:
                if c2 is None:
                    return 0
                return -1 if ascending else 1
            if c2 is None:
                return 1 if ascending else -1
            return compare(c1, c2) if ascending else compare(c2, c1)
        except Exception as exc:
            log_swallowed("Sort key comparison failed, treating as tie: %s", exc)
            return 0

    @cached_property
    def key(self):
        """Key function for ``sorted`` and ``list.sort``."""
        return functools.cmp_to_key(self)

    def sort(self, items: Iterable[Any]) -> List[Any]:
        return sorted(items, key=self.key)

    def __len__(self) -> int:
        return len(self.keys)


class ComparatorFactory:
    """Builds comparators over a class, resolving field names through a cache."""

    def __init__(self, cache: Optional[BeanMetadataCache] = None):
        self.cache = cache if cache is not None else bean_cache

    def build_comparator(
        self, python_type: Union[type, TypeDescriptor], sort_keys: Sequence[Any]
    ) -> BeanComparator:
        """
        Build a comparator from ``sort_keys``.

        Field names that cannot be resolved, or whose values have no natural
        ordering, are left out of the comparator.
        """
        keys = []
        for sort_key in map(SortKey.coerce, sort_keys):
            if not sort_key.is_field:
                keys.append((sort_key.ascending, sort_key.target))
                continue
            field = self.cache.get_field(python_type, sort_key.target)
            if field is None or not field.orderable:
                logger.debug(
                    "Dropping sort key '%s': %s",
                    sort_key.target,
                    "unknown field" if field is None else "not orderable",
                )
                continue
            keys.append((sort_key.ascending, field.get))
        return BeanComparator(keys)

    def get_comparator(
        self, python_type: Union[type, TypeDescriptor], *fields: str, ascending: bool = True
    ) -> BeanComparator:
        """Build a comparator sorting every named field in one direction."""
        return self.build_comparator(
            python_type, [SortKey(ascending, name) for name in fields]
        )

    @staticmethod
    def comparator_from_extractors(sort_keys: Sequence[Any]) -> BeanComparator:
        """Build a comparator from extractor keys only; no field resolution."""
        keys = []
        for sort_key in map(SortKey.coerce, sort_keys):
            if sort_key.is_field or not callable(sort_key.target):
                raise TypeError(
                    f"Expected a value extractor, got {sort_key.target!r}"
                )
            keys.append((sort_key.ascending, sort_key.target))
        return BeanComparator(keys)


# Global comparator factory instance
comparator_factory = ComparatorFactory()
