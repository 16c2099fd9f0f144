"""Order service layer (Use Cases).

Orchestrates validation, duplicate detection, mapping and persistence.
Creation walks through these states, any of which may end in a typed
failure::

    Received -> Validated -> IdResolved -> DuplicateChecked -> Persisted -> Mapped

Business rules enforced:
- Requests are validated before any storage access.
- An existing order id is never overwritten.  The ``exists`` probe is a
  fast path; the storage primary key is the authoritative guard, and a
  conflict it reports is surfaced as the same ``InvalidOrderData``.
- Lookups of unknown ids raise ``OrderNotFound`` instead of returning
  ``None``.

Storage failures are logged with request context and re-raised
unchanged; retry policy belongs to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog

from modules.orders.constants import ORDER_ID_MISMATCH
from modules.orders.exceptions import (
    DuplicateOrderId,
    InvalidOrderData,
    OrderNotFound,
    StorageError,
)
from modules.orders.mappers import generate_order_id, map_to_order, map_to_order_response
from modules.orders.validators import validate_create_order_request

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderRequest, OrderResponse
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def _duplicate_message(order_id: UUID) -> str:
    return f"Order with ID {order_id} already exists."


class OrderService:
    """Application service for Order use-cases.

    Receives its repository and logger via constructor injection (DIP)
    and holds no other state, so one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        log: Optional[structlog.stdlib.BoundLogger] = None,
    ) -> None:
        self._order_repo = order_repository
        self._log = log or logger

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_order(self, request: CreateOrderRequest) -> OrderResponse:
        """Validate, persist and return a new order.

        Raises:
            InvalidOrderData: the request is invalid or its id is taken.
            StorageError: the repository failed.
        """
        log = self._log
        log.info(
            "order.creation_started",
            item_count=len(request.order_items or []),
            client_supplied_id=request.order_id is not None,
        )

        try:
            validate_create_order_request(request)
        except InvalidOrderData as exc:
            log.warning("order.invalid_data", reason=str(exc))
            raise

        order_id = request.order_id or generate_order_id()
        log = log.bind(order_id=str(order_id))

        try:
            if await self._order_repo.exists(order_id):
                log.warning("order.duplicate_id", detected_by="probe")
                raise InvalidOrderData(_duplicate_message(order_id))

            order = map_to_order(request, order_id=order_id)
            created = await self._order_repo.create(order)
        except DuplicateOrderId as exc:
            log.warning("order.duplicate_id", detected_by="storage")
            raise InvalidOrderData(_duplicate_message(order_id)) from exc
        except StorageError:
            log.exception("order.creation_failed")
            raise

        response = map_to_order_response(created)
        log.info("order.created", item_count=len(response.order_items))
        return response

    async def update_order(
        self, order_id: UUID, request: CreateOrderRequest
    ) -> OrderResponse:
        """Fully replace an order's customer name and items.

        The id and the original ``created_at`` are kept.

        Raises:
            InvalidOrderData: the request is invalid or names another id.
            OrderNotFound: no order with ``order_id`` exists.
            StorageError: the repository failed.
        """
        log = self._log.bind(order_id=str(order_id))
        log.info("order.update_started")

        if request.order_id is not None and request.order_id != order_id:
            log.warning("order.invalid_data", reason=ORDER_ID_MISMATCH)
            raise InvalidOrderData(ORDER_ID_MISMATCH)
        try:
            validate_create_order_request(request)
        except InvalidOrderData as exc:
            log.warning("order.invalid_data", reason=str(exc))
            raise

        try:
            current = await self._order_repo.get_by_id(order_id)
            if current is None:
                log.warning("order.not_found")
                raise OrderNotFound(order_id)
            replacement = map_to_order(
                request, order_id=order_id, created_at=current.created_at
            )
            updated = await self._order_repo.update(replacement)
        except StorageError:
            log.exception("order.update_failed")
            raise

        log.info("order.updated", item_count=len(updated.items))
        return map_to_order_response(updated)

    async def delete_order(self, order_id: UUID) -> None:
        """Delete an order and its items.

        Raises:
            OrderNotFound: nothing was deleted.
            StorageError: the repository failed.
        """
        log = self._log.bind(order_id=str(order_id))
        try:
            deleted = await self._order_repo.delete(order_id)
        except StorageError:
            log.exception("order.delete_failed")
            raise
        if not deleted:
            log.warning("order.not_found")
            raise OrderNotFound(order_id)
        log.info("order.removed")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_order(self, order_id: UUID) -> OrderResponse:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        log = self._log.bind(order_id=str(order_id))
        log.info("order.retrieving")
        try:
            order = await self._order_repo.get_by_id(order_id)
        except StorageError:
            log.exception("order.retrieve_failed")
            raise
        if order is None:
            log.warning("order.not_found")
            raise OrderNotFound(order_id)
        return map_to_order_response(order)

    async def list_orders(self) -> List[OrderResponse]:
        """Return every order, most recently created first."""
        self._log.info("order.listing")
        try:
            orders = await self._order_repo.get_all()
        except StorageError:
            self._log.exception("order.list_failed")
            raise
        return [map_to_order_response(order) for order in orders]
