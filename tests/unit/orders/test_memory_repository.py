"""Unit tests for InMemoryOrderRepository.

The in-memory backend must honour the same contract as the Django one:
reloaded copies with item ids, newest-first listing, duplicate rejection,
full replace and delete semantics.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from asgiref.sync import async_to_sync

from modules.orders.entities import Order, OrderItem
from modules.orders.exceptions import DuplicateOrderId, OrderNotFound, StorageError
from modules.orders.repositories import IOrderRepository, InMemoryOrderRepository

pytestmark = pytest.mark.unit

BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _order(customer_name="John Doe", created_at=BASE_TIME, items=(("PROD001", 2),)) -> Order:
    order_id = uuid4()
    return Order(
        id=order_id,
        customer_name=customer_name,
        created_at=created_at,
        items=[
            OrderItem(order_id=order_id, product_id=product_id, quantity=quantity)
            for product_id, quantity in items
        ],
    )


@pytest.fixture()
def repo():
    return InMemoryOrderRepository()


def test_implements_interface(repo):
    assert isinstance(repo, IOrderRepository)


class TestCreate:
    def test_returns_reloaded_copy_with_item_ids(self, repo):
        order = _order(items=[("PROD001", 2), ("PROD002", 1)])
        created = async_to_sync(repo.create)(order)

        assert created is not order
        assert created.id == order.id
        assert [item.id for item in created.items] == [1, 2]
        assert all(item.order_id == order.id for item in created.items)
        assert order.items[0].id is None

    def test_duplicate_id_rejected(self, repo):
        order = _order()
        async_to_sync(repo.create)(order)

        clash = Order(id=order.id, customer_name="Other", created_at=BASE_TIME)
        with pytest.raises(DuplicateOrderId) as exc_info:
            async_to_sync(repo.create)(clash)

        assert isinstance(exc_info.value, StorageError)
        stored = async_to_sync(repo.get_by_id)(order.id)
        assert stored.customer_name == "John Doe"

    def test_item_ids_never_reused(self, repo):
        first = async_to_sync(repo.create)(_order())
        async_to_sync(repo.delete)(first.id)
        second = async_to_sync(repo.create)(_order())
        assert second.items[0].id > first.items[0].id


class TestRead:
    def test_get_by_id_missing_returns_none(self, repo):
        assert async_to_sync(repo.get_by_id)(uuid4()) is None

    def test_returned_entities_are_detached(self, repo):
        created = async_to_sync(repo.create)(_order())
        created.customer_name = "Mutated"
        assert async_to_sync(repo.get_by_id)(created.id).customer_name == "John Doe"

    def test_get_all_newest_first(self, repo):
        older = async_to_sync(repo.create)(_order("Customer 1", BASE_TIME))
        newer = async_to_sync(repo.create)(_order("Customer 2", BASE_TIME + timedelta(hours=1)))

        orders = async_to_sync(repo.get_all)()

        assert [o.id for o in orders] == [newer.id, older.id]

    def test_get_all_empty(self, repo):
        assert async_to_sync(repo.get_all)() == []

    def test_exists(self, repo):
        created = async_to_sync(repo.create)(_order())
        assert async_to_sync(repo.exists)(created.id) is True
        assert async_to_sync(repo.exists)(uuid4()) is False


class TestUpdate:
    def test_full_replace_keeps_id(self, repo):
        created = async_to_sync(repo.create)(_order())
        replacement = Order(
            id=created.id,
            customer_name="Updated Customer",
            created_at=created.created_at,
            items=[OrderItem(order_id=created.id, product_id="PROD009", quantity=5)],
        )

        updated = async_to_sync(repo.update)(replacement)

        assert updated.id == created.id
        assert updated.customer_name == "Updated Customer"
        assert [(i.product_id, i.quantity) for i in updated.items] == [("PROD009", 5)]

    def test_missing_order_raises(self, repo):
        with pytest.raises(OrderNotFound):
            async_to_sync(repo.update)(_order())


class TestDelete:
    def test_existing_returns_true(self, repo):
        created = async_to_sync(repo.create)(_order())
        assert async_to_sync(repo.delete)(created.id) is True
        assert async_to_sync(repo.get_by_id)(created.id) is None

    def test_missing_returns_false(self, repo):
        assert async_to_sync(repo.delete)(uuid4()) is False
