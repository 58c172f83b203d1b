"""
Main API handler - routes requests to appropriate endpoint handlers.

Used when a single Lambda function serves every product route; the
per-operation entry points live in api.products.
"""

import os
import logging
from typing import Dict, Any

from api.utils import handle_cors_preflight, create_response, get_http_method
from api.products import handle_create_product, handle_get_all_products, handle_delete_product

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

PRODUCTS_PATH = '/products'


def _with_product_id(event: Dict[str, Any], raw_path: str) -> Dict[str, Any]:
    """Fill pathParameters.id from /products/{id} when the route is a proxy."""
    path_params = dict(event.get('pathParameters') or {})
    if not path_params.get('id'):
        product_id = raw_path.rstrip('/')[len(PRODUCTS_PATH) + 1:]
        if product_id:
            path_params['id'] = product_id
    return {**event, 'pathParameters': path_params}


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler for the Product Catalog API.

    Routes requests to appropriate handlers based on path and method.

    Args:
        event: API Gateway event
        context: Lambda context

    Returns:
        API Gateway response
    """
    raw_path = event.get('rawPath') or event.get('path') or ''
    method = get_http_method(event)
    logger.info(f"Request: {method} {raw_path}")

    # Handle CORS preflight
    cors_response = handle_cors_preflight(event)
    if cors_response:
        return cors_response

    path = raw_path.rstrip('/').lower()

    if path == PRODUCTS_PATH and method == 'POST':
        return handle_create_product(event)

    elif path == PRODUCTS_PATH and method == 'GET':
        return handle_get_all_products(event)

    elif path.startswith(PRODUCTS_PATH + '/') and method == 'DELETE':
        return handle_delete_product(_with_product_id(event, raw_path))

    else:
        return create_response(404, {
            'error': 'Not found',
            'message': 'Invalid endpoint or method',
            'path': path,
            'method': method,
            'available_endpoints': [
                'POST /products',
                'GET /products',
                'DELETE /products/{id}',
            ]
        })
