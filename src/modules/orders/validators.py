"""Validation rules for order creation requests.

The first violation wins; rules are checked in this order:

1. customer name present and not blank;
2. at least one item;
3. every item, in sequence: product id present, quantity positive;
4. limits of the storage schema (trimmed lengths, quantity range).

``check_create_order_request`` is pure and returns a tagged
``ValidationResult``; ``validate_create_order_request`` raises
``InvalidOrderData`` for callers that prefer exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from modules.orders import constants
from modules.orders.dtos import CreateOrderRequest
from modules.orders.exceptions import InvalidOrderData


@dataclass(frozen=True)
class ValidationResult:
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise InvalidOrderData(self.error)


VALID = ValidationResult()


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def check_create_order_request(request: CreateOrderRequest) -> ValidationResult:
    if _is_blank(request.customer_name):
        return ValidationResult(constants.CUSTOMER_NAME_REQUIRED)

    if not request.order_items:
        return ValidationResult(constants.ORDER_ITEMS_REQUIRED)

    for item in request.order_items:
        if _is_blank(item.product_id):
            return ValidationResult(constants.PRODUCT_ID_REQUIRED)
        if item.quantity <= 0:
            return ValidationResult(constants.QUANTITY_NOT_POSITIVE)

    if len(request.customer_name.strip()) > constants.CUSTOMER_NAME_MAX_LENGTH:
        return ValidationResult(constants.CUSTOMER_NAME_TOO_LONG)

    for item in request.order_items:
        if len(item.product_id.strip()) > constants.PRODUCT_ID_MAX_LENGTH:
            return ValidationResult(constants.PRODUCT_ID_TOO_LONG)
        if item.quantity > constants.QUANTITY_MAX:
            return ValidationResult(constants.QUANTITY_TOO_LARGE)

    return VALID


def validate_create_order_request(request: CreateOrderRequest) -> None:
    """Raise ``InvalidOrderData`` with the first rule the request breaks."""
    check_create_order_request(request).raise_for_error()
