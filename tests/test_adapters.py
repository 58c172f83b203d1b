"""Tests for the DynamoDB/S3 adapters and the store factory."""

from dataclasses import FrozenInstanceError
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from adapters.dynamodb_record_store import DynamoDBRecordStore
from adapters.factory import create_stores
from adapters.memory import InMemoryBlobStore, InMemoryRecordStore
from adapters.s3_blob_store import S3BlobStore
from shared.config import load_config
from tests.conftest import client_error


@pytest.fixture
def mock_table():
    return MagicMock()


@pytest.fixture
def dynamodb_store(mock_table):
    return DynamoDBRecordStore(mock_table)


@pytest.fixture
def product_record():
    return {
        "id": "p-1",
        "name": "Mug",
        "description": "Ceramic mug",
        "price": 12.5,
        "imageUrl": "https://bucket.s3.amazonaws.com/products/p-1.png",
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
    }


@pytest.mark.unit
class TestDynamoDBRecordStore:

    def test_put_converts_floats_to_decimal(self, dynamodb_store, mock_table, product_record):
        dynamodb_store.put(product_record)

        item = mock_table.put_item.call_args.kwargs["Item"]
        assert item["price"] == Decimal("12.5")
        assert isinstance(item["price"], Decimal)
        assert item["id"] == "p-1"
        # Caller's record is left untouched
        assert product_record["price"] == 12.5

    def test_get_converts_decimals_to_native(self, dynamodb_store, mock_table, product_record):
        mock_table.get_item.return_value = {"Item": {**product_record, "price": Decimal("12.5")}}

        record = dynamodb_store.get("p-1")

        mock_table.get_item.assert_called_once_with(Key={"id": "p-1"})
        assert record["price"] == 12.5
        assert isinstance(record["price"], float)

    def test_get_integral_price_becomes_int(self, dynamodb_store, mock_table, product_record):
        mock_table.get_item.return_value = {"Item": {**product_record, "price": Decimal("30")}}

        assert dynamodb_store.get("p-1")["price"] == 30
        assert isinstance(dynamodb_store.get("p-1")["price"], int)

    def test_get_missing_returns_none(self, dynamodb_store, mock_table):
        mock_table.get_item.return_value = {}

        assert dynamodb_store.get("missing") is None

    def test_delete(self, dynamodb_store, mock_table):
        dynamodb_store.delete("p-1")

        mock_table.delete_item.assert_called_once_with(Key={"id": "p-1"})

    def test_list_all_follows_scan_pages(self, dynamodb_store, mock_table):
        mock_table.scan.side_effect = [
            {"Items": [{"id": "a", "price": Decimal("1")}], "LastEvaluatedKey": {"id": "a"}},
            {"Items": [{"id": "b", "price": Decimal("2.5")}]},
        ]

        records = dynamodb_store.list_all()

        assert records == [{"id": "a", "price": 1}, {"id": "b", "price": 2.5}]
        assert mock_table.scan.call_count == 2
        assert mock_table.scan.call_args_list[1].kwargs == {"ExclusiveStartKey": {"id": "a"}}

    def test_list_all_empty_table(self, dynamodb_store, mock_table):
        mock_table.scan.return_value = {"Items": []}

        assert dynamodb_store.list_all() == []

    def test_errors_propagate(self, dynamodb_store, mock_table):
        mock_table.scan.side_effect = client_error("Scan")

        with pytest.raises(ClientError):
            dynamodb_store.list_all()


@pytest.mark.unit
class TestS3BlobStore:

    def test_put_uploads_and_returns_public_url(self):
        s3 = MagicMock()
        store = S3BlobStore(s3, "my-images")

        url = store.put("products/p-1.png", b"bytes", "image/png")

        s3.put_object.assert_called_once_with(
            Bucket="my-images",
            Key="products/p-1.png",
            Body=b"bytes",
            ContentType="image/png",
        )
        assert url == "https://my-images.s3.amazonaws.com/products/p-1.png"

    def test_delete(self):
        s3 = MagicMock()
        S3BlobStore(s3, "my-images").delete("products/p-1.png")

        s3.delete_object.assert_called_once_with(Bucket="my-images", Key="products/p-1.png")

    def test_put_error_propagates(self):
        s3 = MagicMock()
        s3.put_object.side_effect = client_error("PutObject", "NoSuchBucket")

        with pytest.raises(ClientError):
            S3BlobStore(s3, "missing").put("k", b"x", "image/jpg")


@pytest.mark.unit
class TestConfig:

    def test_defaults(self):
        config = load_config({})

        assert config.products_table_name == "products"
        assert config.product_images_bucket_name == "product-images"
        assert config.region == "us-east-1"
        assert config.storage_backend == "aws"
        assert config.is_lambda is False

    def test_reads_environment(self):
        config = load_config({
            "PRODUCTS_TABLE_NAME": "Stack-Products-Table",
            "PRODUCT_IMAGES_BUCKET_NAME": "stack-images",
            "AWS_DEFAULT_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT": "http://localhost:8000",
            "AWS_PROFILE": "dev",
            "LAMBDA_TASK_ROOT": "/var/task",
            "STORAGE_BACKEND": "MEMORY",
        })

        assert config.products_table_name == "Stack-Products-Table"
        assert config.product_images_bucket_name == "stack-images"
        assert config.region == "eu-west-1"
        assert config.dynamodb_endpoint == "http://localhost:8000"
        assert config.aws_profile == "dev"
        assert config.is_lambda is True
        assert config.storage_backend == "memory"

    def test_config_is_immutable(self):
        config = load_config({})

        with pytest.raises(FrozenInstanceError):
            config.products_table_name = "other"

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            load_config({"STORAGE_BACKEND": "redis"})


@pytest.mark.unit
class TestCreateStores:

    def test_memory_backend(self):
        record_store, blob_store = create_stores(load_config({"STORAGE_BACKEND": "memory"}))

        assert isinstance(record_store, InMemoryRecordStore)
        assert isinstance(blob_store, InMemoryBlobStore)

    @patch("adapters.factory.boto3.Session")
    def test_aws_backend_wires_table_and_bucket(self, mock_session_cls):
        session = mock_session_cls.return_value
        config = load_config({
            "PRODUCTS_TABLE_NAME": "products-table",
            "PRODUCT_IMAGES_BUCKET_NAME": "images-bucket",
        })

        record_store, blob_store = create_stores(config)

        mock_session_cls.assert_called_once_with(region_name="us-east-1")
        session.resource.assert_called_once_with("dynamodb")
        session.resource.return_value.Table.assert_called_once_with("products-table")
        session.client.assert_called_once_with("s3")
        assert isinstance(record_store, DynamoDBRecordStore)
        assert isinstance(blob_store, S3BlobStore)
        assert blob_store.bucket == "images-bucket"

    @patch("adapters.factory.boto3.Session")
    def test_local_profile_and_endpoints(self, mock_session_cls):
        session = mock_session_cls.return_value
        config = load_config({
            "AWS_PROFILE": "dev",
            "DYNAMODB_ENDPOINT": "http://localhost:8000",
            "S3_ENDPOINT": "http://localhost:4566",
        })

        create_stores(config)

        mock_session_cls.assert_called_once_with(profile_name="dev", region_name="us-east-1")
        session.resource.assert_called_once_with("dynamodb", endpoint_url="http://localhost:8000")
        session.client.assert_called_once_with("s3", endpoint_url="http://localhost:4566")

    @patch("adapters.factory.boto3.Session")
    def test_profile_ignored_inside_lambda(self, mock_session_cls):
        config = load_config({"AWS_PROFILE": "dev", "LAMBDA_TASK_ROOT": "/var/task"})

        create_stores(config)

        mock_session_cls.assert_called_once_with(region_name="us-east-1")
