"""
Input validation for the product catalog API.
"""

import math
from decimal import Decimal
from typing import Any, Optional

REQUIRED_FIELDS_MESSAGE = "All fields are required: name, description, price, and image"
PRODUCT_ID_REQUIRED_MESSAGE = "Product ID is required"

# DynamoDB number limits
MAX_PRICE_DIGITS = 38
MIN_PRICE_EXPONENT = -130
MAX_PRICE_EXPONENT = 125


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def is_valid_price(value: Any) -> bool:
    """
    Price must be a real, finite number that DynamoDB can store exactly.

    Bools and numeric strings are rejected, as are numbers with more than 38
    significant digits or outside DynamoDB's magnitude range.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    # 10**38 needs 127 bits; anything wider cannot fit in 38 digits
    if isinstance(value, int) and value.bit_length() > 128:
        return False

    price = Decimal(str(value))
    if not price:
        return True
    return (
        len(price.as_tuple().digits) <= MAX_PRICE_DIGITS
        and MIN_PRICE_EXPONENT <= price.adjusted() <= MAX_PRICE_EXPONENT
    )


def validate_create_product(data: Any) -> tuple[bool, Optional[str]]:
    """
    Validate create product request.

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(data, dict):
        return False, "Request body must be a JSON object"

    if (
        not _is_non_empty_string(data.get("name"))
        or not _is_non_empty_string(data.get("description"))
        or not is_valid_price(data.get("price"))
        or not _is_non_empty_string(data.get("imageData"))
    ):
        return False, REQUIRED_FIELDS_MESSAGE

    return True, None


def validate_product_id(product_id: Any) -> tuple[bool, Optional[str]]:
    """Validate the product ID path parameter."""
    if not _is_non_empty_string(product_id):
        return False, PRODUCT_ID_REQUIRED_MESSAGE
    return True, None

