"""Order repository interface.

Extends ``IRepository[Order, UUID]`` with the guarantees the Order
aggregate needs.  The Service Layer depends exclusively on this
contract (DIP); ``OrderDjangoRepository`` and
``InMemoryOrderRepository`` implement it.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository
from modules.orders.entities import Order


class IOrderRepository(IRepository[Order, UUID]):
    """Repository contract for the Order aggregate root.

    Every operation may raise ``StorageError`` when the backend fails.
    """

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[Order]:
        """Retrieve an order with its items, or ``None``."""

    @abstractmethod
    async def get_all(self) -> List[Order]:
        """Return all orders with their items, newest ``created_at`` first."""

    @abstractmethod
    async def create(self, entity: Order) -> Order:
        """Persist an order and its items as a single atomic unit.

        Returns the order reloaded from storage, so storage-assigned
        fields (item ids) are populated.

        Raises:
            DuplicateOrderId: an order with the same id already exists.
        """

    @abstractmethod
    async def update(self, entity: Order) -> Order:
        """Fully replace an order's mutable fields and items.

        The id is never changed.

        Raises:
            OrderNotFound: no order with this id exists.
        """

    @abstractmethod
    async def delete(self, id: UUID) -> bool:
        """Delete an order and, by cascade, its items."""

    @abstractmethod
    async def exists(self, id: UUID) -> bool:
        """Existence probe used for duplicate detection."""
