"""Order domain exceptions.

Raised by the Validator, the Service Layer and the repositories.
The API layer (Views) catches the business errors and translates
them into envelopes with the matching HTTP status; storage errors
travel up to the project exception handler (HTTP 500).
"""

from __future__ import annotations

from uuid import UUID


class OrderServiceError(Exception):
    """Base class for business-rule failures of the order service."""


class InvalidOrderData(OrderServiceError):
    """The request fails validation or violates a business rule.

    Covers missing fields, non-positive quantities and duplicate ids.
    Recoverable by the caller correcting its input; never retried.
    """


class OrderNotFound(OrderServiceError):
    """The requested order does not exist."""

    def __init__(self, order_id: UUID) -> None:
        self.order_id = order_id
        super().__init__(f"Order with ID {order_id} was not found.")


class StorageError(Exception):
    """The persistence layer failed.

    The original database exception is kept as ``__cause__``.
    """


class DuplicateOrderId(StorageError):
    """Storage rejected an insert because the order id is already taken."""

    def __init__(self, order_id: UUID) -> None:
        self.order_id = order_id
        super().__init__(f"Order with ID {order_id} already exists.")
