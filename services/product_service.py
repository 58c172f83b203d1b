"""
Product lifecycle workflow.

Records live in the record store, images in the blob store, and there is no
transaction spanning the two. Ordering is therefore fixed:

  create: upload image -> write record  (a failed write leaves an orphaned image)
  delete: look up record -> delete image (best effort) -> delete record
"""

import os
import uuid
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from adapters.interfaces import BlobStore, RecordStore
from schemas.product_model import (
    DecodedImage,
    ProductRecord,
    create_product_record,
    parse_timestamp,
    utc_timestamp,
)
from schemas.validation import validate_create_product, validate_product_id
from services.exceptions import (
    ImageUploadError,
    ProductNotFoundError,
    ProductValidationError,
    RecordDeleteError,
    RecordLookupError,
    RecordReadError,
    RecordWriteError,
)
from services.image_service import build_image_key, decode_image_data, extract_image_key

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

LOG_PREFIX = "[PRODUCT-SERVICE]"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _new_product_id() -> str:
    return str(uuid.uuid4())


# ============================================================================
# Create
# ============================================================================

def upload_product_image(blob_store: BlobStore, product_id: str, image: DecodedImage) -> str:
    """
    Upload a product image under products/{id}.{ext}.

    Returns:
        Image locator

    Raises:
        ImageUploadError: If the blob store rejects the upload
    """
    key = build_image_key(product_id, image.extension)
    try:
        image_url = blob_store.put(key, image.data, image.content_type)
    except Exception as e:
        logger.error(f"{LOG_PREFIX} CREATE | ID: {product_id} | Image upload failed for key {key}: {e}", exc_info=True)
        raise ImageUploadError() from e

    logger.info(f"{LOG_PREFIX} CREATE | ID: {product_id} | Image uploaded: {image_url}")
    return image_url


def save_product_record(record_store: RecordStore, record: ProductRecord) -> None:
    """
    Write a product record whose image is already uploaded.

    The image is not rolled back when the write fails.

    Raises:
        RecordWriteError: If the record store rejects the write
    """
    try:
        record_store.put(record)
    except Exception as e:
        logger.error(
            f"{LOG_PREFIX} CREATE | ID: {record['id']} | Record write failed, "
            f"image left orphaned at {record['imageUrl']}: {e}",
            exc_info=True,
        )
        raise RecordWriteError() from e


def create_product(
    data: Dict[str, Any],
    record_store: RecordStore,
    blob_store: BlobStore,
    id_factory: Callable[[], str] = _new_product_id,
    clock: Optional[Callable[[], datetime]] = None,
) -> ProductRecord:
    """
    Create a product: validate, upload its image, then write its record.

    Args:
        data: Product input from the request body
        record_store: Where the record is written
        blob_store: Where the image is uploaded
        id_factory: Generates product IDs
        clock: Returns the current time (defaults to UTC now)

    Returns:
        The created product record

    Raises:
        ProductValidationError: Missing/invalid fields or undecodable image
        ImageUploadError: Upload failed, nothing was written
        RecordWriteError: Record write failed after the image was uploaded
    """
    is_valid, error = validate_create_product(data)
    if not is_valid:
        raise ProductValidationError(error)

    product_id = id_factory()
    timestamp = utc_timestamp(clock() if clock else None)

    image = decode_image_data(data['imageData'])
    image_url = upload_product_image(blob_store, product_id, image)

    record = create_product_record(
        product_id=product_id,
        name=data['name'],
        description=data['description'],
        price=data['price'],
        image_url=image_url,
        timestamp=timestamp,
    )
    save_product_record(record_store, record)

    logger.info(f"{LOG_PREFIX} CREATE | ID: {product_id} | Name: {record['name']}")
    return record


# ============================================================================
# List
# ============================================================================

def sort_newest_first(products: List[ProductRecord]) -> List[ProductRecord]:
    """Sort by parsed createdAt, newest first; unparseable timestamps go last."""
    return sorted(
        products,
        key=lambda p: parse_timestamp(p.get('createdAt')) or _OLDEST,
        reverse=True,
    )


def list_products(record_store: RecordStore) -> List[ProductRecord]:
    """
    Return every product, newest first.

    Raises:
        RecordReadError: If the record store cannot be read
    """
    try:
        products = record_store.list_all()
    except Exception as e:
        logger.error(f"{LOG_PREFIX} LIST | Error: {e}", exc_info=True)
        raise RecordReadError() from e

    products = sort_newest_first(products or [])
    logger.info(f"{LOG_PREFIX} LIST | Retrieved {len(products)} products")
    return products


# ============================================================================
# Delete
# ============================================================================

def find_product(record_store: RecordStore, product_id: str) -> ProductRecord:
    """
    Raises:
        ProductNotFoundError: If no record has this ID
        RecordLookupError: If the record store cannot be read
    """
    try:
        product = record_store.get(product_id)
    except Exception as e:
        logger.error(f"{LOG_PREFIX} DELETE | ID: {product_id} | Lookup failed: {e}", exc_info=True)
        raise RecordLookupError() from e

    if not product:
        logger.warning(f"{LOG_PREFIX} DELETE | ID: {product_id} | Not found")
        raise ProductNotFoundError()
    return product


def delete_product_image(blob_store: BlobStore, product: ProductRecord) -> bool:
    """
    Best-effort removal of a product's image. Never raises.

    Returns:
        True if the blob delete call succeeded
    """
    image_url = product.get('imageUrl')
    if not image_url:
        return False

    key = extract_image_key(image_url)
    if not key:
        logger.warning(f"{LOG_PREFIX} DELETE | ID: {product['id']} | Could not derive image key from {image_url}")
        return False

    try:
        blob_store.delete(key)
    except Exception as e:
        # Continue with product deletion even if image deletion fails
        logger.warning(f"{LOG_PREFIX} DELETE | ID: {product['id']} | Error deleting image {key}: {e}", exc_info=True)
        return False

    logger.info(f"{LOG_PREFIX} DELETE | ID: {product['id']} | Image deleted: {key}")
    return True


def delete_product(product_id: Any, record_store: RecordStore, blob_store: BlobStore) -> Dict[str, Any]:
    """
    Delete a product and, best effort, its image.

    Returns:
        Confirmation payload

    Raises:
        ProductValidationError: Missing product ID
        ProductNotFoundError: Unknown product ID
        RecordLookupError: Lookup failed
        RecordDeleteError: Record delete failed
    """
    is_valid, error = validate_product_id(product_id)
    if not is_valid:
        raise ProductValidationError(error)

    product = find_product(record_store, product_id)
    delete_product_image(blob_store, product)

    try:
        record_store.delete(product_id)
    except Exception as e:
        logger.error(f"{LOG_PREFIX} DELETE | ID: {product_id} | Record delete failed: {e}", exc_info=True)
        raise RecordDeleteError() from e

    logger.info(f"{LOG_PREFIX} DELETE | ID: {product_id} | Deleted")
    return {'message': 'Product deleted successfully', 'id': product_id}
