"""Persistence-agnostic order entities.

Repositories return these instead of ORM instances, so the service
layer works identically over any storage backend.  Ownership is
one-directional: an ``Order`` holds its items, an ``OrderItem`` only
knows the id of its order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID


@dataclass
class OrderItem:
    """A single product/quantity line of an order.

    ``id`` is assigned by storage and stays ``None`` until persisted.
    """

    order_id: UUID
    product_id: str
    quantity: int
    id: Optional[int] = None


@dataclass
class Order:
    """Order aggregate root."""

    id: UUID
    customer_name: str
    created_at: datetime
    items: List[OrderItem] = field(default_factory=list)
