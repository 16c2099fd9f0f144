"""Conversions between request/response DTOs and order entities.

Pure apart from id generation and the creation timestamp.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

import uuid6
from django.utils import timezone

from modules.orders.dtos import CreateOrderRequest, OrderItemResponse, OrderResponse
from modules.orders.entities import Order, OrderItem


def generate_order_id() -> UUID:
    """Return a new time-ordered (v7) order id."""
    return uuid6.uuid7()


def map_to_order(
    request: CreateOrderRequest,
    order_id: Optional[UUID] = None,
    created_at: Optional[datetime] = None,
) -> Order:
    """Build an ``Order`` entity from a validated request.

    The id is taken from ``order_id``, then from the request, and is
    generated as a last resort.  Every item is bound to that same id.
    """
    resolved_id = order_id or request.order_id or generate_order_id()
    items = [
        OrderItem(
            order_id=resolved_id,
            product_id=item.product_id.strip(),
            quantity=item.quantity,
        )
        for item in request.order_items or []
    ]
    return Order(
        id=resolved_id,
        customer_name=request.customer_name.strip(),
        created_at=created_at or timezone.now(),
        items=items,
    )


def map_to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=order.id,
        customer_name=order.customer_name,
        created_at=order.created_at,
        order_items=[
            OrderItemResponse(product_id=item.product_id, quantity=item.quantity)
            for item in order.items
        ],
    )
