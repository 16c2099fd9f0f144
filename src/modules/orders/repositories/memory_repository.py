"""In-process implementation of the Order repository.

Keeps orders in a dict keyed by id and hands out deep copies, so callers
can never mutate stored state by accident.  Each coroutine body runs
without awaiting, which makes every operation atomic on the event loop.
Item ids come from a monotonically increasing counter and are never
reused, matching the SQL backend.
"""

from __future__ import annotations

import copy
import itertools
from typing import Dict, List, Optional
from uuid import UUID

import structlog

from modules.orders.entities import Order, OrderItem
from modules.orders.exceptions import DuplicateOrderId, OrderNotFound
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class InMemoryOrderRepository(IOrderRepository):
    """Order repository backed by a Python dict."""

    def __init__(self) -> None:
        self._orders: Dict[UUID, Order] = {}
        self._item_ids = itertools.count(1)

    async def get_by_id(self, id: UUID) -> Optional[Order]:
        order = self._orders.get(id)
        return copy.deepcopy(order) if order else None

    async def get_all(self) -> List[Order]:
        ordered = sorted(self._orders.values(), key=lambda o: o.created_at, reverse=True)
        return copy.deepcopy(ordered)

    async def create(self, entity: Order) -> Order:
        if entity.id in self._orders:
            logger.warning("order.duplicate_id_rejected", order_id=str(entity.id))
            raise DuplicateOrderId(entity.id)
        self._orders[entity.id] = self._stored_copy(entity)
        logger.info("order.persisted", order_id=str(entity.id), item_count=len(entity.items))
        return copy.deepcopy(self._orders[entity.id])

    async def update(self, entity: Order) -> Order:
        if entity.id not in self._orders:
            raise OrderNotFound(entity.id)
        self._orders[entity.id] = self._stored_copy(entity)
        logger.info("order.replaced", order_id=str(entity.id), item_count=len(entity.items))
        return copy.deepcopy(self._orders[entity.id])

    async def delete(self, id: UUID) -> bool:
        removed = self._orders.pop(id, None)
        if removed is None:
            logger.info("order.delete_missed", order_id=str(id))
            return False
        logger.info("order.deleted", order_id=str(id), items_deleted=len(removed.items))
        return True

    async def exists(self, id: UUID) -> bool:
        return id in self._orders

    def _stored_copy(self, entity: Order) -> Order:
        return Order(
            id=entity.id,
            customer_name=entity.customer_name,
            created_at=entity.created_at,
            items=[
                OrderItem(
                    id=next(self._item_ids),
                    order_id=entity.id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                )
                for item in entity.items
            ],
        )
