from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from dependencies import get_order_service
from schemas import (
    AppliedFilters,
    AssignDeliveryRequest,
    AssignDeliveryResponse,
    AssignmentDetails,
    FilteredOrdersResponse,
    OrderCreate,
    OrderListResponse,
    OrderOut,
    OrderResponse,
    StatisticsOut,
    StatisticsResponse,
)
from services.orders_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    order = await service.create_order(payload)
    return OrderResponse(
        message="Order created successfully",
        data=OrderOut.from_domain(order),
    )


@router.get("", response_model=OrderListResponse)
async def list_orders(
    service: OrderService = Depends(get_order_service),
) -> OrderListResponse:
    orders = await service.list_orders()
    return OrderListResponse(
        count=len(orders),
        data=[OrderOut.from_domain(order) for order in orders],
    )


@router.get("/filter", response_model=FilteredOrdersResponse)
async def filter_orders(
    is_paid: Optional[bool] = Query(default=None, alias="isPaid"),
    max_distance: Optional[str] = Query(default=None, alias="maxDistance"),
    service: OrderService = Depends(get_order_service),
) -> FilteredOrdersResponse:
    orders = await service.filter_orders(is_paid=is_paid, max_distance=max_distance)
    return FilteredOrdersResponse(
        count=len(orders),
        filters=AppliedFilters(is_paid=is_paid, max_distance=max_distance),
        data=[OrderOut.from_domain(order) for order in orders],
    )


@router.get("/stats", response_model=StatisticsResponse)
async def read_statistics(
    service: OrderService = Depends(get_order_service),
) -> StatisticsResponse:
    stats = await service.get_statistics()
    return StatisticsResponse(data=StatisticsOut.from_domain(stats))


@router.post(
    "/assign",
    response_model=AssignDeliveryResponse,
    response_model_exclude_unset=True,
)
async def assign_delivery(
    payload: AssignDeliveryRequest,
    service: OrderService = Depends(get_order_service),
) -> AssignDeliveryResponse:
    assignment = await service.assign_delivery(payload.max_distance)
    if assignment.is_empty:
        return AssignDeliveryResponse(
            success=True,
            message="No order available",
            data=None,
            explanation="No unpaid orders found within the specified maximum distance",
        )
    return AssignDeliveryResponse(
        success=True,
        message="Delivery assigned successfully",
        data=OrderOut.from_domain(assignment.order),
        assignment_details=AssignmentDetails.from_domain(assignment.summary),
    )


@router.delete("/{order_id}", response_model=OrderResponse)
async def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    order = await service.delete_order(order_id)
    return OrderResponse(
        message="Order deleted successfully",
        data=OrderOut.from_domain(order),
    )
