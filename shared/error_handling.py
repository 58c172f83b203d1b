"""
Shared error handling utilities for secure error responses.
"""

import logging
import json
from typing import Dict, Any

from .cors import get_cors_headers

logger = logging.getLogger(__name__)

VALIDATION_ERROR = 'Validation error'
NOT_FOUND_ERROR = 'Not found'
INTERNAL_SERVER_ERROR = 'Internal server error'

GENERIC_SERVER_ERROR_MESSAGE = "An error occurred processing your request"


def create_error_response(status_code: int, error_type: str, message: str) -> Dict[str, Any]:
    """
    Create standardized error response without information disclosure.

    Args:
        status_code: HTTP status code
        error_type: Error category (VALIDATION_ERROR, NOT_FOUND_ERROR, ...)
        message: User-friendly error message

    Returns:
        API Gateway response
    """
    return {
        'statusCode': status_code,
        'headers': get_cors_headers(),
        'body': json.dumps({
            'error': error_type,
            'message': message
        })
    }


def handle_exception(e: Exception, context: str = "request") -> Dict[str, Any]:
    """
    Turn an unexpected exception into a generic 500 response.

    Anything reaching here is a server fault (misconfiguration, bug), so the
    client only gets a generic message; full details go to the log.

    Args:
        e: Exception to handle
        context: Where the error occurred, for the log line

    Returns:
        API Gateway error response
    """
    logger.error(f"[{context.upper()}] Unhandled {type(e).__name__}: {e}", exc_info=e)

    return create_error_response(500, INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR_MESSAGE)
