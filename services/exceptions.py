"""
Errors raised by the product workflow.

Each storage error carries a client-safe message; the underlying cause is
chained and logged where it is raised.
"""

from typing import Optional


class ProductError(Exception):
    """Base class for product workflow errors."""

    message = "An error occurred processing your request"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ProductValidationError(ProductError):
    message = "Invalid input"


class ProductNotFoundError(ProductError):
    message = "Product not found"


class ProductStorageError(ProductError):
    message = "Internal server error"


class ImageUploadError(ProductStorageError):
    message = "Failed to upload image"


class RecordWriteError(ProductStorageError):
    message = "Failed to create product"


class RecordReadError(ProductStorageError):
    message = "Internal server error"


class RecordLookupError(ProductStorageError):
    message = "Failed to retrieve product"


class RecordDeleteError(ProductStorageError):
    message = "Failed to delete product"
