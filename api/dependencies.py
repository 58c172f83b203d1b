"""
Process-wide configuration and stores, built on first use and reused across
warm Lambda invocations.
"""

from functools import lru_cache
from typing import Tuple

from adapters.factory import create_stores
from adapters.interfaces import BlobStore, RecordStore
from shared.config import ProductServiceConfig, load_config


@lru_cache(maxsize=1)
def get_config() -> ProductServiceConfig:
    return load_config()


@lru_cache(maxsize=1)
def get_stores() -> Tuple[RecordStore, BlobStore]:
    return create_stores(get_config())


def reset_dependencies() -> None:
    """Forget cached config and stores (tests, env changes)."""
    get_stores.cache_clear()
    get_config.cache_clear()
