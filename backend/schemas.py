from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

from domain import AssignmentSummary, Order, OrderStatistics

NumberInput = Union[StrictInt, StrictFloat, StrictStr, None]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderCreate(CamelModel):
    order_id: Optional[str] = Field(default=None, description="Unique order identifier")
    restaurant_name: Optional[str] = None
    item_count: NumberInput = Field(default=None, description="Whole number, at least 1")
    is_paid: Optional[bool] = None
    delivery_distance: NumberInput = Field(
        default=None, description="Distance to the customer, non-negative"
    )


class AssignDeliveryRequest(CamelModel):
    max_distance: NumberInput = None


class OrderOut(CamelModel):
    order_id: str
    restaurant_name: str
    item_count: int
    is_paid: bool
    delivery_distance: float
    created_at: datetime

    @classmethod
    def from_domain(cls, order: Order) -> "OrderOut":
        return cls(
            order_id=order.order_id,
            restaurant_name=order.restaurant_name,
            item_count=order.item_count,
            is_paid=order.is_paid,
            delivery_distance=order.delivery_distance,
            created_at=order.created_at,
        )


class OrderResponse(CamelModel):
    success: bool = True
    message: str
    data: OrderOut


class OrderListResponse(CamelModel):
    success: bool = True
    count: int
    data: List[OrderOut]


class AppliedFilters(CamelModel):
    is_paid: Optional[bool] = None
    max_distance: Optional[str] = None


class FilteredOrdersResponse(OrderListResponse):
    filters: AppliedFilters


class StatisticsOut(CamelModel):
    total_orders: int
    paid_orders: int
    unpaid_orders: int
    avg_distance: float
    total_items: int

    @classmethod
    def from_domain(cls, stats: OrderStatistics) -> "StatisticsOut":
        return cls(
            total_orders=stats.total_orders,
            paid_orders=stats.paid_orders,
            unpaid_orders=stats.unpaid_orders,
            avg_distance=stats.avg_distance,
            total_items=stats.total_items,
        )


class StatisticsResponse(CamelModel):
    success: bool = True
    data: StatisticsOut


class AssignmentDetails(CamelModel):
    assigned_order_id: str
    restaurant: str
    distance: float
    item_count: int

    @classmethod
    def from_domain(cls, summary: AssignmentSummary) -> "AssignmentDetails":
        return cls(
            assigned_order_id=summary.assigned_order_id,
            restaurant=summary.restaurant,
            distance=summary.distance,
            item_count=summary.item_count,
        )


class AssignDeliveryResponse(CamelModel):
    success: bool = True
    message: str
    data: Optional[OrderOut]
    assignment_details: Optional[AssignmentDetails] = None
    explanation: Optional[str] = None


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    error: Optional[str] = None
    errors: Optional[List[str]] = None


class HealthResponse(CamelModel):
    success: bool = True
    message: str
    timestamp: datetime
    environment: str


class ApiInfoResponse(CamelModel):
    success: bool = True
    message: str
    version: str
    endpoints: Dict[str, Any]
