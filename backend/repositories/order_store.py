from abc import ABC, abstractmethod
from typing import Iterator, Optional, Sequence

from domain import NewOrder, Order, OrderFilter, SortKey


class DuplicateKey(Exception):
    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Duplicate order_id: {order_id}")


class OrderStore(ABC):
    """Keyed order storage; ``order_id`` is unique and enforced here."""

    @abstractmethod
    def insert(self, new_order: NewOrder) -> Order:
        """Persist ``new_order`` and return it with ``created_at`` set.

        Raises ``DuplicateKey`` when the id is already stored.
        """

    @abstractmethod
    def find_by_id(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    def delete_by_id(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    def query_all(
        self,
        order_filter: OrderFilter,
        sort: Sequence[SortKey] = (),
        limit: Optional[int] = None,
    ) -> Iterator[Order]:
        """Lazily yield orders matching ``order_filter`` in ``sort`` order."""
