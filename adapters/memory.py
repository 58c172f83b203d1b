"""
In-memory record and blob stores.

Used for local runs (STORAGE_BACKEND=memory) and as test doubles. Each store
counts calls per operation and can be told to fail an operation.
"""

import copy
from collections import defaultdict
from typing import Dict, List, Optional

from adapters.interfaces import BlobStore, RecordStore
from schemas.product_model import ProductRecord


class _CallTracking:
    def __init__(self):
        self.calls: Dict[str, int] = defaultdict(int)
        self.failures: Dict[str, Exception] = {}

    def fail_on(self, operation: str, error: Optional[Exception] = None) -> None:
        """Make every later call to `operation` raise `error`."""
        self.failures[operation] = error or RuntimeError(f"{operation} failed")

    def _record_call(self, operation: str) -> None:
        self.calls[operation] += 1
        if operation in self.failures:
            raise self.failures[operation]


class InMemoryRecordStore(_CallTracking, RecordStore):

    def __init__(self):
        super().__init__()
        self.records: Dict[str, ProductRecord] = {}

    def put(self, record: ProductRecord) -> None:
        self._record_call("put")
        self.records[record["id"]] = copy.deepcopy(record)

    def get(self, product_id: str) -> Optional[ProductRecord]:
        self._record_call("get")
        record = self.records.get(product_id)
        return copy.deepcopy(record) if record else None

    def delete(self, product_id: str) -> None:
        self._record_call("delete")
        self.records.pop(product_id, None)

    def list_all(self) -> List[ProductRecord]:
        self._record_call("list_all")
        return [copy.deepcopy(record) for record in self.records.values()]


class InMemoryBlobStore(_CallTracking, BlobStore):

    def __init__(self, bucket: str = "product-images"):
        super().__init__()
        self.bucket = bucket
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}

    def put(self, key: str, data: bytes, content_type: str) -> str:
        self._record_call("put")
        self.objects[key] = data
        self.content_types[key] = content_type
        return f"memory://{self.bucket}/{key}"

    def delete(self, key: str) -> None:
        self._record_call("delete")
        self.objects.pop(key, None)
        self.content_types.pop(key, None)
