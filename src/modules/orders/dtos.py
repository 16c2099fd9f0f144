"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``OrderItemRequest``: input for a single order line item.
- ``CreateOrderRequest``: input for order creation / full replacement.
- ``OrderItemResponse``: output for a single line item.
- ``OrderResponse``: output for an order with its items.

Input DTOs are deliberately lenient: missing or blank values are
accepted here and rejected by ``modules.orders.validators`` with the
messages clients rely on.  Output DTOs serialize with camelCase keys.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class OrderItemRequest(BaseModel):
    """Immutable DTO for a single item of a creation request."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    product_id: Optional[str] = None
    quantity: int = 0


class CreateOrderRequest(BaseModel):
    """Immutable DTO for order creation and full-replacement requests.

    ``order_id`` is optional: when absent the service generates one.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    order_id: Optional[UUID] = None
    customer_name: Optional[str] = None
    order_items: Optional[List[OrderItemRequest]] = None


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderItemResponse(BaseModel):
    """Immutable DTO for order item API responses."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    product_id: str
    quantity: int


class OrderResponse(BaseModel):
    """Immutable DTO for order API responses.

    Item ``id`` and ``order_id`` are storage details and are not exposed.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    order_id: UUID
    customer_name: str
    created_at: datetime
    order_items: List[OrderItemResponse]
