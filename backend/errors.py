from typing import List, Optional


class OrderServiceError(Exception):
    """Base class for failures surfaced to API callers."""

    message = "Order service error"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail or self.message
        super().__init__(self.detail)


class ValidationFailed(OrderServiceError):
    """Input rejected; ``errors`` carries every violated constraint."""

    message = "Validation failed"

    def __init__(self, errors: List[str], message: Optional[str] = None) -> None:
        self.errors = list(errors)
        if message:
            self.message = message
        super().__init__("; ".join(self.errors) or self.message)


class InvalidFilter(ValidationFailed):
    message = "Invalid maxDistance parameter"


class InvalidInput(ValidationFailed):
    message = "Invalid maxDistance"


class DuplicateOrderId(OrderServiceError):
    message = "Order ID already exists"

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f'An order with ID "{order_id}" already exists')


class NotFound(OrderServiceError):
    message = "Order not found"

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f'No order found with ID "{order_id}"')


class StoreUnavailable(OrderServiceError):
    message = "Order store unavailable"
