"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    mapping = config_dict.get("mapping", {})
    if isinstance(mapping, dict) and mapping.get("mode") == "legacy":
        warning_messages.append(
            "Legacy mapping mode is enabled: listings skip required-field validation "
            "and single lookups skip description sanitizing"
        )

    store = config_dict.get("store", {})
    advanced = config_dict.get("advanced", {})
    if not isinstance(store, dict):
        store = {}
    if not isinstance(advanced, dict):
        advanced = {}

    # Small pages multiply the number of requests per listing
    page_size = store.get("page_size", 100)
    if isinstance(page_size, int) and 0 < page_size < 10:
        warning_messages.append(
            f"Small page_size ({page_size}) makes listings issue many requests"
        )

    # Unlimited listings page through the whole table on every call
    max_records = store.get("max_records", 0)
    timeout = advanced.get("http_request_timeout", 30)
    if max_records == 0 and isinstance(timeout, int) and timeout < 10:
        warning_messages.append(
            f"Unlimited max_records with a short http_request_timeout ({timeout}s) "
            "may cause listings to fail on large tables"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
