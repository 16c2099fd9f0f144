"""Order repositories package."""

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.repositories.interfaces import IOrderRepository
from modules.orders.repositories.memory_repository import InMemoryOrderRepository

__all__ = ["IOrderRepository", "InMemoryOrderRepository", "OrderDjangoRepository"]
