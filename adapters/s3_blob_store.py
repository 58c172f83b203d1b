"""
S3-backed image store.
"""

import os
import logging
from typing import Any

from adapters.interfaces import BlobStore

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

LOG_PREFIX = "[S3-BLOB-STORE]"


def build_public_url(bucket: str, key: str) -> str:
    return f"https://{bucket}.s3.amazonaws.com/{key}"


class S3BlobStore(BlobStore):
    """Objects in a single S3 bucket, located by their virtual-hosted URL."""

    def __init__(self, s3_client: Any, bucket: str):
        self.s3 = s3_client
        self.bucket = bucket

    def put(self, key: str, data: bytes, content_type: str) -> str:
        logger.info(
            f"{LOG_PREFIX} PUT | bucket: {self.bucket} | key: {key} | "
            f"contentType: {content_type} | size: {len(data)}"
        )
        self.s3.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        return build_public_url(self.bucket, key)

    def delete(self, key: str) -> None:
        # S3 reports success for keys that do not exist
        self.s3.delete_object(Bucket=self.bucket, Key=key)
        logger.info(f"{LOG_PREFIX} DELETE | bucket: {self.bucket} | key: {key}")
