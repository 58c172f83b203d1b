"""
Environment-derived configuration for the product catalog service.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


STORAGE_BACKEND_AWS = "aws"
STORAGE_BACKEND_MEMORY = "memory"


@dataclass(frozen=True)
class ProductServiceConfig:
    """Settings resolved once per process and passed into the workflow."""

    products_table_name: str
    product_images_bucket_name: str
    region: str = "us-east-1"
    dynamodb_endpoint: Optional[str] = None
    s3_endpoint: Optional[str] = None
    aws_profile: Optional[str] = None
    is_lambda: bool = False
    storage_backend: str = STORAGE_BACKEND_AWS


def load_config(environ: Optional[Mapping[str, str]] = None) -> ProductServiceConfig:
    """
    Build the service configuration from environment variables.

    In Lambda the IAM role is used (no profile). Locally a profile or a
    DynamoDB Local / S3 emulator endpoint may be configured.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Immutable ProductServiceConfig
    """
    env = os.environ if environ is None else environ

    storage_backend = (env.get("STORAGE_BACKEND") or STORAGE_BACKEND_AWS).lower()
    if storage_backend not in (STORAGE_BACKEND_AWS, STORAGE_BACKEND_MEMORY):
        raise ValueError(f"Unsupported STORAGE_BACKEND: {storage_backend}")

    return ProductServiceConfig(
        products_table_name=env.get("PRODUCTS_TABLE_NAME") or "products",
        product_images_bucket_name=env.get("PRODUCT_IMAGES_BUCKET_NAME") or "product-images",
        region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or "us-east-1",
        dynamodb_endpoint=env.get("DYNAMODB_ENDPOINT") or None,
        s3_endpoint=env.get("S3_ENDPOINT") or None,
        aws_profile=env.get("AWS_PROFILE") or env.get("AWS_DEFAULT_PROFILE") or None,
        is_lambda=bool(env.get("LAMBDA_TASK_ROOT")),
        storage_backend=storage_backend,
    )
