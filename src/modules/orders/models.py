"""Order and OrderItem storage models.

Business rules implemented at the storage level:
- Order ids are unique (primary key); a conflicting insert is rejected,
  never turned into an update.
- Customer name max 100 characters, product id max 50 characters.
- Item quantity is at least 1 (check constraint).
- Deleting an order removes its items (CASCADE).
- Orders are read newest first; items keep insertion order.

These models never leave the repository: ``OrderDjangoRepository``
converts them into ``modules.orders.entities`` dataclasses.
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import CUSTOMER_NAME_MAX_LENGTH, PRODUCT_ID_MAX_LENGTH


class OrderRecord(BaseModel):
    """Order aggregate root row."""

    customer_name: models.CharField = models.CharField(
        max_length=CUSTOMER_NAME_MAX_LENGTH
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.id} ({self.customer_name})"


class OrderItemRecord(models.Model):
    """Line item row owned by an order.

    ``id`` is an auto-increment integer; SQLite tables created by Django
    use AUTOINCREMENT, so ids of deleted rows are never handed out again.
    """

    id = models.BigAutoField(primary_key=True)
    order: models.ForeignKey = models.ForeignKey(
        OrderRecord,
        on_delete=models.CASCADE,
        related_name="items",
    )
    product_id: models.CharField = models.CharField(max_length=PRODUCT_ID_MAX_LENGTH)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity}"
