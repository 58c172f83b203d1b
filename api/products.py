"""
Product endpoint handlers and per-operation Lambda entry points.
"""

import os
import json
import logging
from typing import Dict, Any, Optional

from adapters.interfaces import BlobStore, RecordStore
from api.dependencies import get_stores
from api.utils import RequestBodyError, get_path_parameter, get_request_body, create_response, handle_cors_preflight
from services.exceptions import ProductNotFoundError, ProductStorageError, ProductValidationError
from services.product_service import create_product, delete_product, list_products
from shared.error_handling import (
    INTERNAL_SERVER_ERROR,
    NOT_FOUND_ERROR,
    VALIDATION_ERROR,
    create_error_response,
    handle_exception,
)

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


def _resolve_stores(record_store: Optional[RecordStore], blob_store: Optional[BlobStore]):
    if record_store is None or blob_store is None:
        default_record_store, default_blob_store = get_stores()
        record_store = record_store or default_record_store
        blob_store = blob_store or default_blob_store
    return record_store, blob_store


def handle_create_product(
    event: Dict[str, Any],
    record_store: Optional[RecordStore] = None,
    blob_store: Optional[BlobStore] = None,
) -> Dict[str, Any]:
    """
    Handle POST /products - Create product.
    """
    logger.info("[CREATE-PRODUCT] Handling create product request")
    try:
        try:
            body = get_request_body(event)
        except RequestBodyError as e:
            return create_error_response(400, VALIDATION_ERROR, str(e))

        record_store, blob_store = _resolve_stores(record_store, blob_store)
        product = create_product(body, record_store, blob_store)
        logger.info(f"[CREATE-PRODUCT] Created product {product['name']}, ID: {product['id']}")
        return create_response(201, product)

    except ProductValidationError as e:
        return create_error_response(400, VALIDATION_ERROR, e.message)
    except ProductStorageError as e:
        # Details were logged where the error was raised
        return create_error_response(500, INTERNAL_SERVER_ERROR, e.message)
    except Exception as e:
        return handle_exception(e, context='create-product')


def handle_get_all_products(
    event: Dict[str, Any],
    record_store: Optional[RecordStore] = None,
) -> Dict[str, Any]:
    """
    Handle GET /products - List all products, newest first.
    """
    logger.info("[GET-PRODUCTS] Handling list products request")
    try:
        if record_store is None:
            record_store, _ = get_stores()
        products = list_products(record_store)
        return create_response(200, products)

    except ProductStorageError as e:
        return create_error_response(500, INTERNAL_SERVER_ERROR, e.message)
    except Exception as e:
        return handle_exception(e, context='get-products')


def handle_delete_product(
    event: Dict[str, Any],
    record_store: Optional[RecordStore] = None,
    blob_store: Optional[BlobStore] = None,
) -> Dict[str, Any]:
    """
    Handle DELETE /products/{id} - Delete product and its image.
    """
    logger.info("[DELETE-PRODUCT] Handling delete product request")
    try:
        product_id = get_path_parameter(event, 'id')
        logger.info(f"[DELETE-PRODUCT] Product ID: {product_id}")

        if not product_id:
            return create_error_response(400, VALIDATION_ERROR, 'Product ID is required')

        record_store, blob_store = _resolve_stores(record_store, blob_store)
        result = delete_product(product_id, record_store, blob_store)
        return create_response(200, result)

    except ProductValidationError as e:
        return create_error_response(400, VALIDATION_ERROR, e.message)
    except ProductNotFoundError as e:
        return create_error_response(404, NOT_FOUND_ERROR, e.message)
    except ProductStorageError as e:
        return create_error_response(500, INTERNAL_SERVER_ERROR, e.message)
    except Exception as e:
        return handle_exception(e, context='delete-product')


def _log_event(event: Dict[str, Any]) -> None:
    logger.info(f"Event received: {json.dumps(event, indent=2, default=str)}")


def create_product_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point: create product."""
    _log_event(event)
    return handle_cors_preflight(event) or handle_create_product(event)


def get_all_products_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point: list products."""
    _log_event(event)
    return handle_cors_preflight(event) or handle_get_all_products(event)


def delete_product_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point: delete product."""
    _log_event(event)
    return handle_cors_preflight(event) or handle_delete_product(event)
