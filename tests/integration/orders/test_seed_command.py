"""Integration tests for the ``seed_orders`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.orders.models import OrderItemRecord, OrderRecord

pytestmark = pytest.mark.integration


def test_seeds_sample_orders():
    out = StringIO()
    call_command("seed_orders", stdout=out)

    assert "Seed completed: orders=2, skipped=0" in out.getvalue()
    orders = list(OrderRecord.objects.order_by("-created_at"))
    assert [o.customer_name for o in orders] == ["Jane Smith", "John Doe"]
    john = orders[1]
    assert list(
        OrderItemRecord.objects.filter(order=john).values_list("product_id", "quantity")
    ) == [("PROD001", 2), ("PROD002", 1)]


def test_seeded_orders_are_served_by_the_api(api_client):
    call_command("seed_orders", stdout=StringIO())

    data = api_client.get("/api/v1/orders/").json()["data"]

    assert [o["customerName"] for o in data] == ["Jane Smith", "John Doe"]


def test_rerun_does_not_duplicate():
    call_command("seed_orders", stdout=StringIO())
    out = StringIO()
    call_command("seed_orders", stdout=out)

    assert "Seed completed: orders=0, skipped=2" in out.getvalue()
    assert OrderRecord.objects.count() == 2
    assert OrderItemRecord.objects.count() == 3
