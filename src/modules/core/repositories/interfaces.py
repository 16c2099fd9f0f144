"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T, K]``, the base abstract class that
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Every operation is a coroutine: storage round-trips must not block
the event loop of an ASGI worker.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")
K = TypeVar("K")


class IRepository(ABC, Generic[T, K]):
    """Base generic repository contract.

    ``T`` is the domain entity managed by the repository and ``K`` the
    type of its identifier.
    """

    @abstractmethod
    async def get_by_id(self, id: K) -> Optional[T]:
        """Retrieve an entity by its identifier, or ``None``."""

    @abstractmethod
    async def get_all(self) -> List[T]:
        """Return every entity; an empty store yields an empty list."""

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Insert a new entity and return it as stored."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Replace an existing entity and return it as stored."""

    @abstractmethod
    async def delete(self, id: K) -> bool:
        """Remove an entity; ``False`` when nothing matched."""

    @abstractmethod
    async def exists(self, id: K) -> bool:
        """Return ``True`` if an entity with this identifier is stored."""
