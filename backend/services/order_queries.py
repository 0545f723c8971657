from typing import Optional

from domain import NEAREST_FIRST, Order, OrderFilter, OrderStatistics
from repositories.order_store import OrderStore


def find_nearest_unpaid(store: OrderStore, max_distance: float) -> Optional[Order]:
    """Closest unpaid order with ``delivery_distance <= max_distance``.

    Equal distances resolve to the earliest created order.
    """
    candidates = store.query_all(
        OrderFilter(is_paid=False, max_distance=max_distance),
        NEAREST_FIRST,
        limit=1,
    )
    return next(iter(candidates), None)


def compute_statistics(store: OrderStore) -> OrderStatistics:
    total_orders = 0
    paid_orders = 0
    total_items = 0
    total_distance = 0.0
    for order in store.query_all(OrderFilter()):
        total_orders += 1
        if order.is_paid:
            paid_orders += 1
        total_items += order.item_count
        total_distance += order.delivery_distance
    if not total_orders:
        return OrderStatistics()
    return OrderStatistics(
        total_orders=total_orders,
        paid_orders=paid_orders,
        unpaid_orders=total_orders - paid_orders,
        avg_distance=total_distance / total_orders,
        total_items=total_items,
    )
