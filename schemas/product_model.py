"""
Data models for products and their images.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, TypedDict, Union


Number = Union[int, float]


class ProductRecord(TypedDict):
    """Product as persisted in the products table."""
    id: str
    name: str
    description: str
    price: Number
    imageUrl: str  # Points to the object in the images bucket
    createdAt: str
    updatedAt: str


@dataclass(frozen=True)
class DecodedImage:
    """Raw image bytes ready for upload."""
    data: bytes
    extension: str

    @property
    def content_type(self) -> str:
        return f"image/{self.extension}"


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a trailing Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp into an aware datetime, or None if malformed."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def create_product_record(
    product_id: str,
    name: str,
    description: str,
    price: Number,
    image_url: str,
    timestamp: str,
) -> ProductRecord:
    """
    Create a product record dictionary.

    Args:
        product_id: Server-generated product ID
        name: Product name
        description: Product description
        price: Product price
        image_url: Locator of the already uploaded image
        timestamp: Creation timestamp, used for both createdAt and updatedAt

    Returns:
        Product record dictionary
    """
    return {
        "id": product_id,
        "name": name,
        "description": description,
        "price": price,
        "imageUrl": image_url,
        "createdAt": timestamp,
        "updatedAt": timestamp,
    }
