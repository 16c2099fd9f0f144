"""Integration tests for OrderDjangoRepository against the test database."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import patch
from uuid import uuid4

import pytest
from asgiref.sync import async_to_sync
from django.db import DatabaseError

from modules.orders.entities import Order, OrderItem
from modules.orders.exceptions import DuplicateOrderId, OrderNotFound, StorageError
from modules.orders.models import OrderItemRecord, OrderRecord
from modules.orders.repositories import OrderDjangoRepository

pytestmark = pytest.mark.integration

BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _order(customer_name="John Doe", created_at=BASE_TIME, items=(("PROD001", 2), ("PROD002", 1))):
    order_id = uuid4()
    return Order(
        id=order_id,
        customer_name=customer_name,
        created_at=created_at,
        items=[OrderItem(order_id=order_id, product_id=p, quantity=q) for p, q in items],
    )


@pytest.fixture()
def repo():
    return OrderDjangoRepository()


class TestCreate:
    def test_persists_order_and_items(self, repo):
        order = _order()
        created = async_to_sync(repo.create)(order)

        assert created.id == order.id
        assert created.created_at == BASE_TIME
        assert OrderRecord.objects.filter(pk=order.id).exists()
        assert OrderItemRecord.objects.filter(order_id=order.id).count() == 2

    def test_reloaded_items_carry_storage_ids(self, repo):
        created = async_to_sync(repo.create)(_order())

        ids = [item.id for item in created.items]
        assert all(isinstance(i, int) and i > 0 for i in ids)
        assert ids == sorted(ids)
        assert [(i.product_id, i.quantity) for i in created.items] == [
            ("PROD001", 2),
            ("PROD002", 1),
        ]

    def test_duplicate_id_raises_duplicate_order_id(self, repo):
        order = _order()
        async_to_sync(repo.create)(order)

        clash = Order(
            id=order.id,
            customer_name="Intruder",
            created_at=BASE_TIME,
            items=[OrderItem(order_id=order.id, product_id="X", quantity=1)],
        )
        with pytest.raises(DuplicateOrderId) as exc_info:
            async_to_sync(repo.create)(clash)

        assert exc_info.value.order_id == order.id
        assert OrderRecord.objects.get(pk=order.id).customer_name == "John Doe"
        assert OrderItemRecord.objects.filter(order_id=order.id).count() == 2

    def test_database_failure_wrapped_as_storage_error(self, repo):
        failure = DatabaseError("disk I/O error")
        with patch.object(OrderRecord.objects, "create", side_effect=failure):
            with pytest.raises(StorageError) as exc_info:
                async_to_sync(repo.create)(_order())

        assert exc_info.value.__cause__ is failure
        assert not isinstance(exc_info.value, DuplicateOrderId)


class TestRead:
    def test_get_by_id_missing_returns_none(self, repo):
        assert async_to_sync(repo.get_by_id)(uuid4()) is None

    def test_get_by_id_round_trip(self, repo):
        created = async_to_sync(repo.create)(_order())
        assert async_to_sync(repo.get_by_id)(created.id) == created

    def test_get_all_newest_first(self, repo):
        older = async_to_sync(repo.create)(_order("Customer 1", BASE_TIME))
        newer = async_to_sync(repo.create)(_order("Customer 2", BASE_TIME + timedelta(minutes=1)))

        orders = async_to_sync(repo.get_all)()

        assert [o.id for o in orders] == [newer.id, older.id]
        assert all(len(o.items) == 2 for o in orders)

    def test_exists(self, repo):
        created = async_to_sync(repo.create)(_order())
        assert async_to_sync(repo.exists)(created.id) is True
        assert async_to_sync(repo.exists)(uuid4()) is False

    def test_read_failure_wrapped_as_storage_error(self, repo):
        with patch.object(OrderRecord.objects, "prefetch_related", side_effect=DatabaseError("gone")):
            with pytest.raises(StorageError):
                async_to_sync(repo.get_all)()


class TestUpdate:
    def test_replaces_items(self, repo):
        created = async_to_sync(repo.create)(_order())
        old_item_ids = {item.id for item in created.items}
        replacement = Order(
            id=created.id,
            customer_name="Updated Customer",
            created_at=created.created_at,
            items=[OrderItem(order_id=created.id, product_id="PROD009", quantity=4)],
        )

        updated = async_to_sync(repo.update)(replacement)

        assert updated.customer_name == "Updated Customer"
        assert updated.created_at == BASE_TIME
        assert [(i.product_id, i.quantity) for i in updated.items] == [("PROD009", 4)]
        assert not old_item_ids & {item.id for item in updated.items}

    def test_missing_order_raises_not_found(self, repo):
        with pytest.raises(OrderNotFound):
            async_to_sync(repo.update)(_order())


class TestDelete:
    def test_cascades_to_items(self, repo):
        created = async_to_sync(repo.create)(_order())

        assert async_to_sync(repo.delete)(created.id) is True

        assert not OrderRecord.objects.filter(pk=created.id).exists()
        assert not OrderItemRecord.objects.filter(order_id=created.id).exists()

    def test_missing_returns_false(self, repo):
        assert async_to_sync(repo.delete)(uuid4()) is False
