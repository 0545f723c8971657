from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from main import create_app
from repositories.memory_order_store import MemoryOrderStore
from schemas import OrderCreate
from services.orders_service import OrderService

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class StepClock:
    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start - step
        self.step = step

    def __call__(self) -> datetime:
        self.current += self.step
        return self.current


def make_payload(order_id: str, distance: float, is_paid: bool = False, **overrides) -> OrderCreate:
    values = {
        "order_id": order_id,
        "restaurant_name": f"Kitchen {order_id}",
        "item_count": 2,
        "is_paid": is_paid,
        "delivery_distance": distance,
    }
    values.update(overrides)
    return OrderCreate(**values)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store() -> MemoryOrderStore:
    return MemoryOrderStore(clock=StepClock())


@pytest.fixture
def service(store) -> OrderService:
    return OrderService(store)


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as test_client:
        yield test_client
