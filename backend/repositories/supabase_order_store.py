import logging
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Sequence

import httpx
from postgrest.exceptions import APIError

from domain import NewOrder, Order, OrderFilter, SortKey
from errors import StoreUnavailable
from repositories.order_store import DuplicateKey, OrderStore

PAGE_SIZE = 500
UNIQUE_VIOLATION = "23505"
logger = logging.getLogger("food-delivery")


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _to_order(row: Dict[str, Any]) -> Order:
    return Order(
        order_id=row["order_id"],
        restaurant_name=row["restaurant_name"],
        item_count=int(row["item_count"]),
        is_paid=bool(row["is_paid"]),
        delivery_distance=float(row["delivery_distance"]),
        created_at=_parse_datetime(row["created_at"]),
    )


class SupabaseOrderStore(OrderStore):
    """Orders kept in a Postgres table behind PostgREST (see sql/orders.sql)."""

    def __init__(self, client, table_name: str = "orders", page_size: int = PAGE_SIZE) -> None:
        self._client = client
        self._table_name = table_name
        self._page_size = page_size

    def _table(self):
        return self._client.table(self._table_name)

    def _execute(self, query):
        try:
            return query.execute()
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise
            logger.error("Order store rejected request: %s", exc.message)
            raise StoreUnavailable(exc.message or str(exc)) from exc
        except httpx.HTTPError as exc:
            logger.error("Order store request failed: %s", exc)
            raise StoreUnavailable(str(exc)) from exc

    def insert(self, new_order: NewOrder) -> Order:
        record = {
            "order_id": new_order.order_id,
            "restaurant_name": new_order.restaurant_name,
            "item_count": new_order.item_count,
            "is_paid": new_order.is_paid,
            "delivery_distance": new_order.delivery_distance,
        }
        try:
            response = self._execute(self._table().insert(record))
        except APIError as exc:
            raise DuplicateKey(new_order.order_id) from exc
        if not response.data:
            raise StoreUnavailable("Failed to store order")
        return _to_order(response.data[0])

    def find_by_id(self, order_id: str) -> Optional[Order]:
        response = self._execute(
            self._table().select("*").eq("order_id", order_id).limit(1)
        )
        items = response.data or []
        return _to_order(items[0]) if items else None

    def delete_by_id(self, order_id: str) -> Optional[Order]:
        response = self._execute(self._table().delete().eq("order_id", order_id))
        items = response.data or []
        return _to_order(items[0]) if items else None

    def _build_query(self, order_filter: OrderFilter, sort: Sequence[SortKey]):
        query = self._table().select("*")
        if order_filter.is_paid is not None:
            query = query.eq("is_paid", order_filter.is_paid)
        if order_filter.max_distance is not None:
            query = query.lte("delivery_distance", order_filter.max_distance)
        for field_name, descending in sort:
            query = query.order(field_name, desc=descending)
        # Keeps paging stable when sort keys tie.
        return query.order("order_id")

    def query_all(
        self,
        order_filter: OrderFilter,
        sort: Sequence[SortKey] = (),
        limit: Optional[int] = None,
    ) -> Iterator[Order]:
        page_size = self._page_size if limit is None else min(limit, self._page_size)
        start = 0
        while limit is None or start < limit:
            end = start + page_size - 1
            if limit is not None:
                end = min(end, limit - 1)
            response = self._execute(
                self._build_query(order_filter, sort).range(start, end)
            )
            batch = response.data or []
            for row in batch:
                yield _to_order(row)
            if len(batch) < end - start + 1:
                break
            start = end + 1
