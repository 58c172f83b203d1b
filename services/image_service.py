"""
Image payload decoding and image key/locator helpers.
"""

import base64
import binascii
import re
from typing import Optional

from schemas.product_model import DecodedImage
from services.exceptions import ProductValidationError

IMAGE_KEY_PREFIX = "products"
DEFAULT_IMAGE_EXTENSION = "jpg"

DATA_URI_PATTERN = re.compile(r"^data:image/([a-zA-Z0-9.+-]+);base64,")

# Declared MIME subtype -> stored file extension
EXTENSIONS_BY_SUBTYPE = {
    "jpeg": "jpg",
    "png": "png",
    "gif": "gif",
}


def detect_extension(image_data: str) -> str:
    """Unknown or missing subtypes fall back to jpg."""
    match = DATA_URI_PATTERN.match(image_data)
    if not match:
        return DEFAULT_IMAGE_EXTENSION
    return EXTENSIONS_BY_SUBTYPE.get(match.group(1).lower(), DEFAULT_IMAGE_EXTENSION)


def decode_image_data(image_data: str) -> DecodedImage:
    """
    Decode a base64 image payload, optionally prefixed with a data URI.

    Args:
        image_data: e.g. "data:image/png;base64,iVBORw0..." or bare base64

    Returns:
        DecodedImage with raw bytes and file extension

    Raises:
        ProductValidationError: If the payload is not valid base64 or is empty
    """
    extension = detect_extension(image_data)
    payload = DATA_URI_PATTERN.sub("", image_data, count=1)
    payload = "".join(payload.split())

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ProductValidationError("imageData must be a valid base64 encoded image") from e

    if not data:
        raise ProductValidationError("imageData must be a valid base64 encoded image")

    return DecodedImage(data=data, extension=extension)


def build_image_key(product_id: str, extension: str) -> str:
    """Blob key for a product image: products/{id}.{ext}"""
    return f"{IMAGE_KEY_PREFIX}/{product_id}.{extension}"


def extract_image_key(image_url: str) -> Optional[str]:
    """
    Recover the blob key from a stored image locator.

    The locator looks like https://{bucket-host}/{key}; the key is everything
    after the third slash. Returns None if nothing is left after stripping.
    """
    if not image_url:
        return None
    url_parts = image_url.split("/")
    key = "/".join(url_parts[3:])
    return key or None
