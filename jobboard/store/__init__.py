"""Record store clients for the external job table.

Use the factory function to instantiate the configured store:
    from jobboard.store import get_store
    store = get_store(app_config.store, env_config, app_config.advanced)
    records = store.list_records(filter_formula="{status} = 'active'")

Exception handling:
    from jobboard.store import StoreError, StoreHTTPError, StoreTimeoutError

Base class (implement it to plug in another store, or a fake in tests):
    from jobboard.store import BaseRecordStore
"""

from .airtable import AirtableStore
from .base import BaseRecordStore
from .exceptions import (
    StoreConfigurationError,
    StoreError,
    StoreHTTPError,
    StoreResponseError,
    StoreTimeoutError,
)
from .factory import get_store

__all__ = [
    # Base and factory
    "BaseRecordStore",
    "get_store",
    # Stores
    "AirtableStore",
    # Exceptions
    "StoreError",
    "StoreHTTPError",
    "StoreTimeoutError",
    "StoreResponseError",
    "StoreConfigurationError",
]
