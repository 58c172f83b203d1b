"""
DynamoDB-backed product record store.
"""

import os
import logging
from typing import Any, Dict, List, Optional

from adapters.interfaces import RecordStore
from schemas.product_model import ProductRecord
from shared.serialization import convert_decimals_to_native, convert_floats_to_decimal

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

LOG_PREFIX = "[DYNAMODB-RECORD-STORE]"


class DynamoDBRecordStore(RecordStore):
    """
    Product records in a DynamoDB table keyed by "id".

    Storage exceptions (botocore ClientError etc.) are not caught here.
    """

    def __init__(self, table: Any):
        """
        Args:
            table: boto3 DynamoDB Table resource
        """
        self.table = table

    def put(self, record: ProductRecord) -> None:
        self.table.put_item(Item=convert_floats_to_decimal(dict(record)))
        logger.debug(f"{LOG_PREFIX} PUT | ID: {record['id']}")

    def get(self, product_id: str) -> Optional[ProductRecord]:
        response = self.table.get_item(Key={'id': product_id})
        item = response.get('Item')
        if not item:
            logger.debug(f"{LOG_PREFIX} GET | ID: {product_id} | Not found")
            return None
        return convert_decimals_to_native(item)

    def delete(self, product_id: str) -> None:
        self.table.delete_item(Key={'id': product_id})
        logger.debug(f"{LOG_PREFIX} DELETE | ID: {product_id}")

    def list_all(self) -> List[ProductRecord]:
        items: List[Dict[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {}

        # Follow scan pages until the whole table has been read
        while True:
            response = self.table.scan(**scan_kwargs)
            items.extend(response.get('Items', []))
            last_evaluated_key = response.get('LastEvaluatedKey')
            if not last_evaluated_key:
                break
            scan_kwargs['ExclusiveStartKey'] = last_evaluated_key

        logger.debug(f"{LOG_PREFIX} SCAN | Count: {len(items)}")
        return [convert_decimals_to_native(item) for item in items]
