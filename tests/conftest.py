"""Pytest configuration and shared fixtures for the product catalog tests."""

import base64
import json

import pytest
from botocore.exceptions import ClientError

from adapters.memory import InMemoryBlobStore, InMemoryRecordStore
from api.dependencies import reset_dependencies

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR fake png body"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF fake jpeg body"


def client_error(operation: str, code: str = "InternalError") -> ClientError:
    """Build a botocore ClientError like the ones boto3 raises."""
    return ClientError({"Error": {"Code": code, "Message": f"{operation} failed"}}, operation)


def make_event(method: str, path: str, body=None, path_parameters=None) -> dict:
    """Build an API Gateway HTTP API (v2) event."""
    event = {
        "rawPath": path,
        "requestContext": {"http": {"method": method, "path": path}},
        "headers": {"content-type": "application/json"},
        "pathParameters": path_parameters,
        "isBase64Encoded": False,
    }
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    return event


@pytest.fixture(autouse=True)
def isolated_dependencies(monkeypatch):
    """Never let tests reach real AWS through the cached stores."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    reset_dependencies()
    yield
    reset_dependencies()


@pytest.fixture
def record_store():
    return InMemoryRecordStore()


@pytest.fixture
def blob_store():
    return InMemoryBlobStore(bucket="test-product-images")


@pytest.fixture
def png_data_uri():
    return "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def product_input(png_data_uri):
    return {
        "name": "Desk Lamp",
        "description": "Adjustable LED desk lamp",
        "price": 49.99,
        "imageData": png_data_uri,
    }
