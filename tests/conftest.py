import pytest
import structlog
from rest_framework.test import APIClient
from structlog.testing import LogCapture

from modules.orders.dtos import CreateOrderRequest, OrderItemRequest


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def log_capture():
    """A structlog logger whose events are collected instead of emitted.

    Returns ``(logger, capture)``; ``capture.entries`` holds one dict per
    event with ``event``, ``log_level`` and every bound key.
    """
    capture = LogCapture()
    log = structlog.wrap_logger(
        None, processors=[capture], wrapper_class=structlog.BoundLogger
    )
    return log, capture


@pytest.fixture()
def john_doe_request():
    return CreateOrderRequest(
        customer_name="John Doe",
        order_items=[
            OrderItemRequest(product_id="PROD001", quantity=2),
            OrderItemRequest(product_id="PROD002", quantity=1),
        ],
    )


@pytest.fixture()
def order_payload():
    """Wire-format (camelCase) body for order creation."""
    return {
        "customerName": "John Doe",
        "orderItems": [
            {"productId": "PROD001", "quantity": 2},
            {"productId": "PROD002", "quantity": 1},
        ],
    }
