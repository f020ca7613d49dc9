"""
Plain-Python consumers of the introspection API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, TypeVar

K = TypeVar("K")


class EngineStatus(Enum):
    NONE = "none"


class Engine:
    """Main game engine."""

    def get_status(self) -> EngineStatus:
        return EngineStatus.NONE


class Identifiable(Protocol[K]):
    """An element identified by an id."""

    def get_id(self) -> K:
        ...


@dataclass
class Character(Identifiable[int]):
    """Base data of a playable or non-playable character."""

    id: Optional[int] = None

    def get_id(self) -> Optional[int]:
        return self.id
