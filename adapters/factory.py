"""
Build record/blob stores from the service configuration.
"""

import os
import logging
from typing import Tuple

import boto3

from adapters.dynamodb_record_store import DynamoDBRecordStore
from adapters.interfaces import BlobStore, RecordStore
from adapters.memory import InMemoryBlobStore, InMemoryRecordStore
from adapters.s3_blob_store import S3BlobStore
from shared.config import ProductServiceConfig, STORAGE_BACKEND_MEMORY

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))


def create_boto3_session(config: ProductServiceConfig) -> boto3.Session:
    """
    In Lambda, use the IAM role (no profile). Locally, use a profile if set.
    """
    if config.aws_profile and not config.is_lambda:
        logger.info(f"Using AWS profile: {config.aws_profile} in region: {config.region}")
        return boto3.Session(profile_name=config.aws_profile, region_name=config.region)

    logger.info(f"Using default AWS credentials in region: {config.region}")
    return boto3.Session(region_name=config.region)


def create_record_store(config: ProductServiceConfig, session: boto3.Session) -> RecordStore:
    if config.dynamodb_endpoint:
        logger.info(f"Using DynamoDB Local endpoint: {config.dynamodb_endpoint}")
        dynamodb = session.resource('dynamodb', endpoint_url=config.dynamodb_endpoint)
    else:
        dynamodb = session.resource('dynamodb')

    logger.info(f"PRODUCTS_TABLE_NAME: {config.products_table_name}")
    return DynamoDBRecordStore(dynamodb.Table(config.products_table_name))


def create_blob_store(config: ProductServiceConfig, session: boto3.Session) -> BlobStore:
    if config.s3_endpoint:
        logger.info(f"Using S3 endpoint: {config.s3_endpoint}")
        s3 = session.client('s3', endpoint_url=config.s3_endpoint)
    else:
        s3 = session.client('s3')

    logger.info(f"PRODUCT_IMAGES_BUCKET_NAME: {config.product_images_bucket_name}")
    return S3BlobStore(s3, config.product_images_bucket_name)


def create_stores(config: ProductServiceConfig) -> Tuple[RecordStore, BlobStore]:
    """Create the (record store, blob store) pair for the configured backend."""
    if config.storage_backend == STORAGE_BACKEND_MEMORY:
        logger.warning("Using in-memory storage; data does not outlive the process")
        return InMemoryRecordStore(), InMemoryBlobStore(config.product_images_bucket_name)

    session = create_boto3_session(config)
    return create_record_store(config, session), create_blob_store(config, session)
