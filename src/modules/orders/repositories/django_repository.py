"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Single-statement operations use the async ORM directly; multi-statement
writes run inside ``transaction.atomic()`` through ``sync_to_async`` so
the Order aggregate (Order + OrderItems) is persisted all-or-nothing
without blocking the event loop.

Duplicate ids are rejected by the primary key: ``QuerySet.create`` forces
an INSERT, and the resulting ``IntegrityError`` is reported as
``DuplicateOrderId``.  Every other database failure is logged here and
re-raised as ``StorageError`` chained to the original exception.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional
from uuid import UUID

import structlog
from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, transaction

from modules.orders.entities import Order, OrderItem
from modules.orders.exceptions import DuplicateOrderId, OrderNotFound, StorageError
from modules.orders.models import OrderItemRecord, OrderRecord
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


@contextmanager
def _storage_errors(event: str, **context: Any) -> Iterator[None]:
    try:
        yield
    except DatabaseError as exc:
        logger.exception(event, **context)
        raise StorageError(f"Storage failure during {event}.") from exc


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, id: UUID) -> Optional[Order]:
        """Retrieve an order with its items (one batched prefetch query)."""
        logger.debug("order.fetching", order_id=str(id))
        with _storage_errors("order.fetch_failed", order_id=str(id)):
            return await sync_to_async(self._load)(id)

    async def get_all(self) -> List[Order]:
        logger.debug("order.listing")
        with _storage_errors("order.list_failed"):
            return await sync_to_async(self._load_all)()

    async def exists(self, id: UUID) -> bool:
        with _storage_errors("order.exists_failed", order_id=str(id)):
            return await OrderRecord.objects.filter(pk=id).aexists()

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    async def create(self, entity: Order) -> Order:
        log = logger.bind(order_id=str(entity.id), item_count=len(entity.items))
        with _storage_errors("order.create_failed", order_id=str(entity.id)):
            created = await sync_to_async(self._create)(entity)
        log.info("order.persisted")
        return created

    def _create(self, entity: Order) -> Order:
        try:
            with transaction.atomic():
                record = OrderRecord.objects.create(
                    id=entity.id,
                    customer_name=entity.customer_name,
                    created_at=entity.created_at,
                )
                OrderItemRecord.objects.bulk_create(_item_records(record.id, entity.items))
        except IntegrityError as exc:
            if OrderRecord.objects.filter(pk=entity.id).exists():
                logger.warning("order.duplicate_id_rejected", order_id=str(entity.id))
                raise DuplicateOrderId(entity.id) from exc
            raise
        return self._load(entity.id)

    # ------------------------------------------------------------------
    # Update (full replace)
    # ------------------------------------------------------------------

    async def update(self, entity: Order) -> Order:
        with _storage_errors("order.update_failed", order_id=str(entity.id)):
            updated = await sync_to_async(self._update)(entity)
        logger.info("order.replaced", order_id=str(entity.id), item_count=len(entity.items))
        return updated

    def _update(self, entity: Order) -> Order:
        with transaction.atomic():
            matched = OrderRecord.objects.filter(pk=entity.id).update(
                customer_name=entity.customer_name,
                created_at=entity.created_at,
            )
            if not matched:
                raise OrderNotFound(entity.id)
            OrderItemRecord.objects.filter(order_id=entity.id).delete()
            OrderItemRecord.objects.bulk_create(_item_records(entity.id, entity.items))
        return self._load(entity.id)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete(self, id: UUID) -> bool:
        """Hard-delete an order; items go with it (CASCADE)."""
        with _storage_errors("order.delete_failed", order_id=str(id)):
            deleted, per_model = await OrderRecord.objects.filter(pk=id).adelete()
        if not deleted:
            logger.info("order.delete_missed", order_id=str(id))
            return False
        logger.info(
            "order.deleted",
            order_id=str(id),
            items_deleted=per_model.get(OrderItemRecord._meta.label, 0),
        )
        return True

    # ------------------------------------------------------------------
    # Sync helpers (run in the thread-sensitive executor)
    # ------------------------------------------------------------------

    def _load(self, id: UUID) -> Optional[Order]:
        record = OrderRecord.objects.prefetch_related("items").filter(pk=id).first()
        return _to_entity(record) if record else None

    def _load_all(self) -> List[Order]:
        queryset = OrderRecord.objects.prefetch_related("items").order_by("-created_at")
        return [_to_entity(record) for record in queryset]


def _item_records(order_id: UUID, items: List[OrderItem]) -> List[OrderItemRecord]:
    return [
        OrderItemRecord(
            order_id=order_id,
            product_id=item.product_id,
            quantity=item.quantity,
        )
        for item in items
    ]


def _to_entity(record: OrderRecord) -> Order:
    return Order(
        id=record.id,
        customer_name=record.customer_name,
        created_at=record.created_at,
        items=[
            OrderItem(
                id=item.id,
                order_id=item.order_id,
                product_id=item.product_id,
                quantity=item.quantity,
            )
            for item in record.items.all()
        ],
    )
