"""Factory function for instantiating record stores."""

from jobboard.config.environment import EnvironmentConfig
from jobboard.config.models import AdvancedConfig, StoreConfig, StoreType
from jobboard.logging import get_logger

from .airtable import AirtableStore
from .base import BaseRecordStore
from .exceptions import StoreConfigurationError

logger = get_logger(__name__, component="store")


def get_store(
    store_config: StoreConfig,
    env_config: EnvironmentConfig,
    advanced_config: AdvancedConfig,
) -> BaseRecordStore:
    """Factory function to instantiate the configured record store.

    Credentials come from the environment; the table name from the config file
    wins over AIRTABLE_TABLE_NAME when set. Missing credentials do not fail
    here: the store reports them on first use.

    Args:
        store_config: Store section of the app config
        env_config: Environment configuration with credentials
        advanced_config: Advanced configuration with timeout and user-agent settings

    Returns:
        Instantiated record store

    Raises:
        StoreConfigurationError: If the store type is not supported or config is invalid

    Example:
        >>> app_config, env_config = load_config()
        >>> store = get_store(app_config.store, env_config, app_config.advanced)
        >>> records = store.list_records(filter_formula="{status} = 'active'")
    """
    store_map = {
        StoreType.AIRTABLE.value: AirtableStore,
    }

    store_type = getattr(store_config.type, "value", store_config.type)
    store_class = store_map.get(str(store_type).lower())

    if not store_class:
        supported_types = ", ".join(sorted(store_map.keys()))
        raise StoreConfigurationError(
            f"Unknown store type: {store_config.type}. Supported types: {supported_types}"
        )

    logger.debug(
        "Creating store instance",
        extra={
            "event": "store.factory.created",
            "store_type": store_type,
            "store_class": store_class.__name__,
            "has_credentials": env_config.has_credentials,
        },
    )

    return store_class(
        access_token=env_config.airtable_access_token,
        base_id=env_config.airtable_base_id,
        table_name=store_config.table_name or env_config.airtable_table_name,
        endpoint_url=env_config.airtable_endpoint_url,
        page_size=store_config.page_size,
        max_records=store_config.max_records,
        timeout=advanced_config.http_request_timeout,
        user_agent=advanced_config.user_agent,
    )
