"""Environment variable loading and validation."""

import os
import re
from typing import List, Optional

from .exceptions import ConfigurationError

DEFAULT_TABLE_NAME = "Jobs"
DEFAULT_ENDPOINT_URL = "https://api.airtable.com"

_ENDPOINT_URL_PATTERN = re.compile(r"^https?://[^\s/]+(:\d+)?(/[^\s]*)?$")


class EnvironmentConfig:
    """Environment variable configuration holder.

    Credentials are optional here: a missing token or base ID is reported by
    the record store when it is first used, not at startup.
    """

    def __init__(
        self,
        airtable_access_token: Optional[str] = None,
        airtable_base_id: Optional[str] = None,
        airtable_table_name: Optional[str] = None,
        airtable_endpoint_url: Optional[str] = None,
        log_level: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.airtable_access_token = airtable_access_token
        self.airtable_base_id = airtable_base_id
        self.airtable_table_name = airtable_table_name or DEFAULT_TABLE_NAME
        self.airtable_endpoint_url = (airtable_endpoint_url or DEFAULT_ENDPOINT_URL).rstrip("/")
        self.log_level = log_level

    def missing_credentials(self) -> List[str]:
        """Names of the credential variables that are not set."""
        missing = []
        if not self.airtable_access_token:
            missing.append("AIRTABLE_ACCESS_TOKEN")
        if not self.airtable_base_id:
            missing.append("AIRTABLE_BASE_ID")
        return missing

    @property
    def has_credentials(self) -> bool:
        return not self.missing_credentials()


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Credential variables (read at call time by the record store):
    - AIRTABLE_ACCESS_TOKEN: Personal access token
    - AIRTABLE_BASE_ID: Base holding the jobs table

    Optional environment variables:
    - AIRTABLE_TABLE_NAME: Table name (default: Jobs)
    - AIRTABLE_ENDPOINT_URL: API root (default: https://api.airtable.com)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    access_token = _getenv_stripped("AIRTABLE_ACCESS_TOKEN")
    base_id = _getenv_stripped("AIRTABLE_BASE_ID")
    table_name = _getenv_stripped("AIRTABLE_TABLE_NAME")
    endpoint_url = _getenv_stripped("AIRTABLE_ENDPOINT_URL")
    log_level = _getenv_stripped("LOG_LEVEL")

    # Validate endpoint URL format
    if endpoint_url and not _ENDPOINT_URL_PATTERN.match(endpoint_url):
        errors.append(
            f"Invalid AIRTABLE_ENDPOINT_URL: '{endpoint_url}'. Must be an http(s) URL."
        )

    # Validate log level if provided
    if log_level:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Unset variables you do not need to override",
            ],
        )

    return EnvironmentConfig(
        airtable_access_token=access_token,
        airtable_base_id=base_id,
        airtable_table_name=table_name,
        airtable_endpoint_url=endpoint_url,
        log_level=log_level.upper() if log_level else None,
    )


def _getenv_stripped(name: str) -> Optional[str]:
    """Read an environment variable; blank values count as unset."""
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None
