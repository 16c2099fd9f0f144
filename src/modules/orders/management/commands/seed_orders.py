from __future__ import annotations

from datetime import timedelta
from uuid import UUID

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.orders.dtos import CreateOrderRequest, OrderItemRequest
from modules.orders.mappers import map_to_order
from modules.orders.repositories.django_repository import OrderDjangoRepository

# Fixed ids keep the command re-runnable.
SEED_ORDERS = [
    (
        UUID("0190f3a1-0000-7000-8000-000000000001"),
        "John Doe",
        timedelta(days=1),
        [("PROD001", 2), ("PROD002", 1)],
    ),
    (
        UUID("0190f3a1-0000-7000-8000-000000000002"),
        "Jane Smith",
        timedelta(hours=2),
        [("PROD003", 3)],
    ),
]


class Command(BaseCommand):
    help = "Seed the database with sample orders for development."

    def handle(self, *args, **options):
        self.stdout.write("Seeding orders...")
        repository = OrderDjangoRepository()
        now = timezone.now()
        created = skipped = 0

        for order_id, customer_name, age, items in SEED_ORDERS:
            if async_to_sync(repository.exists)(order_id):
                skipped += 1
                continue
            request = CreateOrderRequest(
                order_id=order_id,
                customer_name=customer_name,
                order_items=[
                    OrderItemRequest(product_id=product_id, quantity=quantity)
                    for product_id, quantity in items
                ],
            )
            order = map_to_order(request, created_at=now - age)
            async_to_sync(repository.create)(order)
            created += 1

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: orders={created}, skipped={skipped}")
        )
