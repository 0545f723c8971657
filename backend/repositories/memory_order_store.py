import threading
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from domain import NewOrder, Order, OrderFilter, SortKey
from repositories.order_store import DuplicateKey, OrderStore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryOrderStore(OrderStore):
    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._orders: Dict[str, Order] = {}
        self._last_created_at: Optional[datetime] = None

    def _next_created_at(self) -> datetime:
        created_at = self._clock()
        if self._last_created_at is not None and created_at <= self._last_created_at:
            created_at = self._last_created_at + timedelta(microseconds=1)
        self._last_created_at = created_at
        return created_at

    def insert(self, new_order: NewOrder) -> Order:
        with self._lock:
            if new_order.order_id in self._orders:
                raise DuplicateKey(new_order.order_id)
            order = Order(**asdict(new_order), created_at=self._next_created_at())
            self._orders[order.order_id] = order
            return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    def delete_by_id(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._orders.pop(order_id, None)

    def query_all(
        self,
        order_filter: OrderFilter,
        sort: Sequence[SortKey] = (),
        limit: Optional[int] = None,
    ) -> Iterator[Order]:
        with self._lock:
            rows: List[Order] = [
                order for order in self._orders.values() if order_filter.matches(order)
            ]
        # Stable sorts, least significant key first.
        for field_name, descending in reversed(tuple(sort)):
            rows.sort(key=lambda order: getattr(order, field_name), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return iter(rows)

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)
