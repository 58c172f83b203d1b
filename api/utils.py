"""
Shared utility functions for the Product Catalog API.
"""

import os
import json
import base64
import logging
from typing import Dict, Any, Optional

from shared.cors import get_cors_headers

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


class RequestBodyError(ValueError):
    """Request body is missing or is not valid JSON."""


def get_http_method(event: Dict[str, Any]) -> str:
    method = event.get('requestContext', {}).get('http', {}).get('method') or event.get('httpMethod') or ''
    return method.upper()


def get_path_parameter(event: Dict[str, Any], param_name: str) -> Optional[str]:
    """
    Extract path parameter from API Gateway event.

    Args:
        event: API Gateway event
        param_name: Parameter name

    Returns:
        Parameter value or None
    """
    path_params = event.get('pathParameters') or {}
    return path_params.get(param_name) or path_params.get(param_name.lower())


def get_request_body(event: Dict[str, Any]) -> Any:
    """
    Extract and parse the JSON request body from an API Gateway event.

    Args:
        event: API Gateway event

    Returns:
        Parsed request body

    Raises:
        RequestBodyError: If the body is missing or is not valid JSON
    """
    body = event.get('body')

    if not body:
        raise RequestBodyError("Request body is required")

    if isinstance(body, dict):
        return body

    try:
        if event.get('isBase64Encoded'):
            body = base64.b64decode(body).decode('utf-8')
        return json.loads(body)
    except (ValueError, TypeError) as e:
        raise RequestBodyError("Request body must be valid JSON") from e


def create_response(
    status_code: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create standardized API Gateway response with CORS and security headers.

    Args:
        status_code: HTTP status code
        body: Response body
        headers: Optional additional headers

    Returns:
        API Gateway response
    """
    default_headers = get_cors_headers()

    if headers:
        default_headers.update(headers)

    return {
        'statusCode': status_code,
        'headers': default_headers,
        'body': json.dumps(body, default=str) if not isinstance(body, str) else body
    }


def handle_cors_preflight(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Handle CORS preflight OPTIONS request.

    Returns:
        CORS response or None if not a preflight request
    """
    if get_http_method(event) == 'OPTIONS':
        return create_response(200, '')

    return None
