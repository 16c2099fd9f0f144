"""Order DRF serializers for API input.

The serializer operates at the Interface layer (API Views) and checks
only the *shape* of the payload (types, UUID format).  Missing and blank
values pass through so the Service Layer can reject them with the
business messages from ``modules.orders.validators``.
"""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from modules.orders.dtos import CreateOrderRequest, OrderItemRequest


class CreateOrderItemSerializer(serializers.Serializer):
    """Shape of a single item in an order request."""

    productId = serializers.CharField(
        source="product_id",
        required=False,
        allow_null=True,
        allow_blank=True,
        trim_whitespace=False,
        default=None,
    )
    quantity = serializers.IntegerField(required=False, default=0)


class CreateOrderSerializer(serializers.Serializer):
    """Shape of an order creation / replacement request."""

    orderId = serializers.UUIDField(source="order_id", required=False, allow_null=True)
    customerName = serializers.CharField(
        source="customer_name",
        required=False,
        allow_null=True,
        allow_blank=True,
        trim_whitespace=False,
    )
    # Only the list may be null; a null entry inside it is a shape error.
    orderItems = serializers.ListSerializer(
        child=CreateOrderItemSerializer(),
        source="order_items",
        required=False,
        allow_null=True,
    )

    def to_dto(self) -> CreateOrderRequest:
        """Build the service DTO from ``validated_data``."""
        data: Dict[str, Any] = self.validated_data
        items = data.get("order_items")
        return CreateOrderRequest(
            order_id=data.get("order_id"),
            customer_name=data.get("customer_name"),
            order_items=(
                None
                if items is None
                else [
                    OrderItemRequest(
                        product_id=item.get("product_id"),
                        quantity=item.get("quantity", 0),
                    )
                    for item in items
                ]
            ),
        )
