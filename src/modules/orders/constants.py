"""Order domain constants.

Column limits mirror the storage schema; the messages are part of the
public API contract and are asserted on by clients.
"""

CUSTOMER_NAME_MAX_LENGTH = 100
PRODUCT_ID_MAX_LENGTH = 50
# Upper bound of the quantity column (PositiveIntegerField).
QUANTITY_MAX = 2147483647

CUSTOMER_NAME_REQUIRED = "Customer name is required."
ORDER_ITEMS_REQUIRED = "At least one order item is required."
PRODUCT_ID_REQUIRED = "Product ID is required for all items."
QUANTITY_NOT_POSITIVE = "Quantity must be greater than zero for all items."
CUSTOMER_NAME_TOO_LONG = (
    f"Customer name must not exceed {CUSTOMER_NAME_MAX_LENGTH} characters."
)
PRODUCT_ID_TOO_LONG = f"Product ID must not exceed {PRODUCT_ID_MAX_LENGTH} characters."
QUANTITY_TOO_LARGE = f"Quantity must not exceed {QUANTITY_MAX} for any item."
ORDER_ID_MISMATCH = "Order ID in body does not match the requested order."
