"""
Classes whose annotations are deferred and partly unresolvable at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, ClassVar, Optional

if TYPE_CHECKING:
    from decimal import Decimal


@dataclass(frozen=True)
class Column:
    name: str


class Order:
    id: Annotated[int, Column("order_id")]
    total: Optional[Decimal]
    reference: str
    created: ClassVar[int] = 0
