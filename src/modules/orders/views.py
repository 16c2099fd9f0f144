"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Every response is wrapped in the ``ApiResponse`` envelope.  Domain
exceptions are caught and translated into HTTP status codes; anything
else propagates to ``modules.core.exception_handler`` (HTTP 500); the
view never swallows generic exceptions.

The service is asynchronous; ``async_to_sync`` runs it from the
synchronous DRF request cycle.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.envelope import ApiResponse
from modules.orders.exceptions import InvalidOrderData, OrderNotFound
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import CreateOrderSerializer
from modules.orders.services import OrderService

REQUEST_BODY_REQUIRED = "Request body is required."


def _envelope(
    data: Any = None,
    message: str = "",
    status_code: int = status.HTTP_200_OK,
) -> Response:
    return Response(
        ApiResponse.success_result(data, message).to_payload(),
        status=status_code,
    )


def _error(message: str, status_code: int) -> Response:
    return Response(ApiResponse.error_result(message).to_payload(), status=status_code)


def _parse_order_id(pk: Optional[str]) -> Optional[UUID]:
    try:
        return UUID(str(pk))
    except ValueError:
        return None


class OrderViewSet(ViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with an injected repository (DIP).
    All storage access goes through the service/repository layer.
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(order_repository=OrderDjangoRepository())

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @extend_schema(
        request=CreateOrderSerializer,
        responses={
            201: OpenApiResponse(description="Order created."),
            400: OpenApiResponse(description="Invalid order data."),
        },
    )
    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        if request.data is None:
            return _error(REQUEST_BODY_REQUIRED, status.HTTP_400_BAD_REQUEST)

        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = async_to_sync(self._service.create_order)(serializer.to_dto())
        except InvalidOrderData as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)

        return _envelope(
            order, "Order created successfully.", status.HTTP_201_CREATED
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(responses={200: OpenApiResponse(description="All orders, newest first.")})
    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/"""
        orders = async_to_sync(self._service.list_orders)()
        return _envelope(orders, "Orders retrieved successfully.")

    @extend_schema(
        responses={
            200: OpenApiResponse(description="Order found."),
            404: OpenApiResponse(description="Order not found."),
        },
    )
    def retrieve(self, request: Request, pk: Optional[str] = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order_id = _parse_order_id(pk)
        if order_id is None:
            return _error(f"Order with ID {pk} was not found.", status.HTTP_404_NOT_FOUND)
        try:
            order = async_to_sync(self._service.get_order)(order_id)
        except OrderNotFound as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _envelope(order, "Order retrieved successfully.")

    # ------------------------------------------------------------------
    # Full replace / Delete
    # ------------------------------------------------------------------

    @extend_schema(
        request=CreateOrderSerializer,
        responses={
            200: OpenApiResponse(description="Order replaced."),
            400: OpenApiResponse(description="Invalid order data."),
            404: OpenApiResponse(description="Order not found."),
        },
    )
    def update(self, request: Request, pk: Optional[str] = None) -> Response:
        """PUT /api/v1/orders/{pk}/"""
        order_id = _parse_order_id(pk)
        if order_id is None:
            return _error(f"Order with ID {pk} was not found.", status.HTTP_404_NOT_FOUND)
        if request.data is None:
            return _error(REQUEST_BODY_REQUIRED, status.HTTP_400_BAD_REQUEST)

        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = async_to_sync(self._service.update_order)(
                order_id, serializer.to_dto()
            )
        except OrderNotFound as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        except InvalidOrderData as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        return _envelope(order, "Order updated successfully.")

    @extend_schema(
        responses={
            200: OpenApiResponse(description="Order deleted."),
            404: OpenApiResponse(description="Order not found."),
        },
    )
    def destroy(self, request: Request, pk: Optional[str] = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        order_id = _parse_order_id(pk)
        if order_id is None:
            return _error(f"Order with ID {pk} was not found.", status.HTTP_404_NOT_FOUND)
        try:
            async_to_sync(self._service.delete_order)(order_id)
        except OrderNotFound as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _envelope(None, "Order deleted successfully.")
