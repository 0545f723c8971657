import pytest

from conftest import make_payload
from errors import DuplicateOrderId, InvalidFilter, InvalidInput, NotFound, ValidationFailed
from repositories.order_store import DuplicateKey
from schemas import OrderCreate
from services.orders_service import OrderService

pytestmark = pytest.mark.anyio


async def _seed(service, *orders):
    for order_id, distance, is_paid in orders:
        await service.create_order(make_payload(order_id, distance, is_paid))


async def test_create_order_trims_and_coerces(service):
    order = await service.create_order(
        OrderCreate(
            order_id="  ORD-1 ",
            restaurant_name=" Sushi Bar ",
            item_count="3",
            is_paid=True,
            delivery_distance="4.25",
        )
    )

    assert order.order_id == "ORD-1"
    assert order.restaurant_name == "Sushi Bar"
    assert order.item_count == 3
    assert order.is_paid is True
    assert order.delivery_distance == 4.25


async def test_create_order_collects_every_error(service, store):
    with pytest.raises(ValidationFailed) as excinfo:
        await service.create_order(
            OrderCreate(
                order_id="",
                restaurant_name="Noodle House",
                item_count=0,
                is_paid=False,
                delivery_distance=-1,
            )
        )

    errors = excinfo.value.errors
    assert "Order ID is required" in errors
    assert "Item count must be a positive whole number" in errors
    assert "Delivery distance must be a non-negative number" in errors
    assert len(store) == 0


async def test_duplicate_order_id_is_rejected(service):
    await service.create_order(make_payload("A", 1.0))

    with pytest.raises(DuplicateOrderId):
        await service.create_order(make_payload("A", 9.0, is_paid=True))


async def test_store_level_duplicate_maps_to_duplicate_order_id():
    class RacingStore:
        def find_by_id(self, order_id):
            return None

        def insert(self, new_order):
            raise DuplicateKey(new_order.order_id)

    with pytest.raises(DuplicateOrderId):
        await OrderService(RacingStore()).create_order(make_payload("A", 1.0))


async def test_list_orders_newest_first(service):
    await _seed(service, ("A", 5.0, False), ("B", 2.0, False), ("C", 2.0, True))

    orders = await service.list_orders()

    assert [order.order_id for order in orders] == ["C", "B", "A"]


async def test_filter_orders_combines_filters(service):
    await _seed(
        service,
        ("A", 5.0, False),
        ("B", 2.0, False),
        ("C", 2.0, True),
        ("D", 1.0, True),
    )

    orders = await service.filter_orders(is_paid=True, max_distance=3)

    assert [order.order_id for order in orders] == ["D", "C"]


async def test_filter_orders_each_filter_optional(service):
    await _seed(service, ("A", 5.0, False), ("B", 2.0, True))

    assert len(await service.filter_orders()) == 2
    assert [o.order_id for o in await service.filter_orders(is_paid=False)] == ["A"]
    assert [o.order_id for o in await service.filter_orders(max_distance="2")] == ["B"]
    assert len(await service.filter_orders(max_distance="")) == 2


@pytest.mark.parametrize("max_distance", [-1, "abc", "nan", 10**400])
async def test_filter_orders_rejects_invalid_distance(service, max_distance):
    with pytest.raises(InvalidFilter):
        await service.filter_orders(max_distance=max_distance)


async def test_assign_delivery_picks_nearest_unpaid(service):
    await _seed(service, ("A", 5.0, False), ("B", 2.0, False), ("C", 2.0, True))

    assignment = await service.assign_delivery(10)

    assert assignment.order.order_id == "B"
    assert assignment.summary.assigned_order_id == "B"
    assert assignment.summary.restaurant == "Kitchen B"
    assert assignment.summary.distance == 2.0
    assert assignment.summary.item_count == 2


async def test_assign_delivery_does_not_claim_order(service):
    await _seed(service, ("D", 2.0, False), ("B", 2.0, False))

    first = await service.assign_delivery(10)
    second = await service.assign_delivery(10)

    assert first.order == second.order
    assert first.order.order_id == "D"
    assert len(await service.list_orders()) == 2


async def test_assign_delivery_none_available(service):
    await _seed(service, ("A", 5.0, False), ("C", 1.0, True))

    assignment = await service.assign_delivery(4)

    assert assignment.is_empty
    assert assignment.summary is None


@pytest.mark.parametrize("max_distance", [None, -0.5, "far", True, 10**400])
async def test_assign_delivery_rejects_invalid_input(service, max_distance):
    with pytest.raises(InvalidInput):
        await service.assign_delivery(max_distance)


async def test_delete_order_removes_from_all_reads(service):
    await _seed(service, ("A", 5.0, False), ("B", 2.0, True))

    deleted = await service.delete_order("A")

    assert deleted.order_id == "A"
    assert [o.order_id for o in await service.list_orders()] == ["B"]
    assert await service.filter_orders(is_paid=False) == []
    assert (await service.get_statistics()).total_orders == 1
    with pytest.raises(NotFound):
        await service.delete_order("A")


async def test_statistics_through_service(service):
    assert (await service.get_statistics()).avg_distance == 0
    await _seed(service, ("A", 4.0, False), ("B", 2.0, True))

    stats = await service.get_statistics()

    assert stats.total_orders == 2
    assert stats.avg_distance == pytest.approx(3.0)
