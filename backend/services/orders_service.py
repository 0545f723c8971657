import asyncio
import logging
import math
from typing import Any, List, Optional, Tuple

from domain import (
    NEWEST_FIRST,
    Assignment,
    AssignmentSummary,
    NewOrder,
    Order,
    OrderFilter,
    OrderStatistics,
)
from errors import DuplicateOrderId, InvalidFilter, InvalidInput, NotFound, ValidationFailed
from repositories.order_store import DuplicateKey, OrderStore
from schemas import OrderCreate
from services.order_queries import compute_statistics, find_nearest_unpaid

# Upper bound of the Postgres integer column.
MAX_ITEM_COUNT = 2**31 - 1
MAX_DISTANCE_ERROR = "maxDistance must be a non-negative number"
logger = logging.getLogger("food-delivery")


def _parse_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _parse_item_count(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        # Whole numbers stay exact; only "4.0"-style input goes through float.
        count = int(value.strip()) if isinstance(value, str) else value
    except ValueError:
        count = value
    if not isinstance(count, int):
        number = _parse_number(count)
        if number is None or not number.is_integer():
            return None
        count = int(number)
    if count < 1 or count > MAX_ITEM_COUNT:
        return None
    return count


def _parse_max_distance(value: Any) -> Optional[float]:
    number = _parse_number(value)
    if number is None or number < 0:
        return None
    return number


def _clean_text(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_order(payload: OrderCreate) -> Tuple[Optional[NewOrder], List[str]]:
    """Check every field and return the cleaned order or all violations."""
    errors: List[str] = []

    order_id = _clean_text(payload.order_id)
    if not order_id:
        errors.append("Order ID is required")

    restaurant_name = _clean_text(payload.restaurant_name)
    if not restaurant_name:
        errors.append("Restaurant name is required")

    item_count = _parse_item_count(payload.item_count)
    if payload.item_count is None:
        errors.append("Item count is required")
    elif item_count is None:
        errors.append("Item count must be a positive whole number")

    if payload.is_paid is None:
        errors.append("Payment status is required")

    delivery_distance = _parse_number(payload.delivery_distance)
    if payload.delivery_distance is None:
        errors.append("Delivery distance is required")
    elif delivery_distance is None or delivery_distance < 0:
        errors.append("Delivery distance must be a non-negative number")

    if errors:
        return None, errors
    return (
        NewOrder(
            order_id=order_id,
            restaurant_name=restaurant_name,
            item_count=item_count,
            is_paid=bool(payload.is_paid),
            delivery_distance=delivery_distance,
        ),
        [],
    )


class OrderService:
    def __init__(self, store: OrderStore) -> None:
        self.store = store

    async def create_order(self, payload: OrderCreate) -> Order:
        new_order, errors = validate_order(payload)
        if errors:
            raise ValidationFailed(errors)

        existing = await asyncio.to_thread(self.store.find_by_id, new_order.order_id)
        if existing is not None:
            raise DuplicateOrderId(new_order.order_id)
        try:
            order = await asyncio.to_thread(self.store.insert, new_order)
        except DuplicateKey as exc:
            raise DuplicateOrderId(new_order.order_id) from exc
        logger.info("Created order %s (%s)", order.order_id, order.restaurant_name)
        return order

    async def list_orders(self) -> List[Order]:
        return await asyncio.to_thread(self._collect, OrderFilter())

    async def filter_orders(
        self,
        is_paid: Optional[bool] = None,
        max_distance: Any = None,
    ) -> List[Order]:
        distance_limit = None
        if max_distance is not None and max_distance != "":
            distance_limit = _parse_max_distance(max_distance)
            if distance_limit is None:
                raise InvalidFilter([MAX_DISTANCE_ERROR])
        order_filter = OrderFilter(is_paid=is_paid, max_distance=distance_limit)
        return await asyncio.to_thread(self._collect, order_filter)

    async def assign_delivery(self, max_distance: Any) -> Assignment:
        if max_distance is None:
            raise InvalidInput(["maxDistance is required"], message="maxDistance is required")
        distance_limit = _parse_max_distance(max_distance)
        if distance_limit is None:
            raise InvalidInput([MAX_DISTANCE_ERROR])

        order = await asyncio.to_thread(find_nearest_unpaid, self.store, distance_limit)
        if order is None:
            logger.info("No unpaid order within %s", distance_limit)
            return Assignment()
        logger.info(
            "Assigned order %s at distance %s", order.order_id, order.delivery_distance
        )
        return Assignment(order=order, summary=AssignmentSummary.for_order(order))

    async def get_statistics(self) -> OrderStatistics:
        return await asyncio.to_thread(compute_statistics, self.store)

    async def delete_order(self, order_id: str) -> Order:
        deleted = await asyncio.to_thread(self.store.delete_by_id, order_id)
        if deleted is None:
            raise NotFound(order_id)
        logger.info("Deleted order %s", order_id)
        return deleted

    def _collect(self, order_filter: OrderFilter) -> List[Order]:
        return list(self.store.query_all(order_filter, NEWEST_FIRST))
