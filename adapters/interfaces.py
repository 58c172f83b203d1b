from abc import ABC, abstractmethod
from typing import List, Optional

from schemas.product_model import ProductRecord


class RecordStore(ABC):
    """
    Key-addressed store for product records.

    put and delete are idempotent. list_all returns records in no
    particular order; ordering is the caller's concern.
    """

    @abstractmethod
    def put(self, record: ProductRecord) -> None:
        pass

    @abstractmethod
    def get(self, product_id: str) -> Optional[ProductRecord]:
        """
        Fetch a record by ID.

        Returns:
            The record, or None if no record has this ID
        """
        pass

    @abstractmethod
    def delete(self, product_id: str) -> None:
        pass

    @abstractmethod
    def list_all(self) -> List[ProductRecord]:
        pass


class BlobStore(ABC):
    """Binary object store addressed by caller-chosen keys."""

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """
        Store an object.

        Args:
            key: Object key
            data: Raw bytes
            content_type: Content-Type to declare for the object

        Returns:
            Durable locator (URL) of the stored object
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass
