from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence, Tuple

ORDER_FIELDS = (
    "order_id",
    "restaurant_name",
    "item_count",
    "is_paid",
    "delivery_distance",
    "created_at",
)

SortKey = Tuple[str, bool]

NEWEST_FIRST: Sequence[SortKey] = (("created_at", True),)
# Ties on distance fall back to insertion order.
NEAREST_FIRST: Sequence[SortKey] = (
    ("delivery_distance", False),
    ("created_at", False),
)


@dataclass(frozen=True)
class NewOrder:
    order_id: str
    restaurant_name: str
    item_count: int
    is_paid: bool
    delivery_distance: float


@dataclass(frozen=True)
class Order:
    order_id: str
    restaurant_name: str
    item_count: int
    is_paid: bool
    delivery_distance: float
    created_at: datetime


@dataclass(frozen=True)
class OrderFilter:
    is_paid: Optional[bool] = None
    max_distance: Optional[float] = None

    def matches(self, order: Order) -> bool:
        if self.is_paid is not None and order.is_paid != self.is_paid:
            return False
        if self.max_distance is not None and order.delivery_distance > self.max_distance:
            return False
        return True


@dataclass(frozen=True)
class OrderStatistics:
    total_orders: int = 0
    paid_orders: int = 0
    unpaid_orders: int = 0
    avg_distance: float = 0.0
    total_items: int = 0


@dataclass(frozen=True)
class AssignmentSummary:
    assigned_order_id: str
    restaurant: str
    distance: float
    item_count: int

    @classmethod
    def for_order(cls, order: Order) -> "AssignmentSummary":
        return cls(
            assigned_order_id=order.order_id,
            restaurant=order.restaurant_name,
            distance=order.delivery_distance,
            item_count=order.item_count,
        )


@dataclass(frozen=True)
class Assignment:
    order: Optional[Order] = None
    summary: Optional[AssignmentSummary] = None

    @property
    def is_empty(self) -> bool:
        return self.order is None
