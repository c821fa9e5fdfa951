"""Structured logging: component-tagged loggers, formatters and scoped context."""

import logging
from typing import Optional, Union

from .config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from .context import clear_log_context, get_log_context, log_context, pop_log_context, push_log_context


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its ``component`` into each call's extra fields."""

    def process(self, msg, kwargs):
        # Fields passed on the call win over the adapter's defaults
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Get a logger, optionally tagging every record with a component field.

    Args:
        name: Logger name (typically __name__)
        component: Component identifier added to all records

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="retrieval")
        >>> logger.info("Listed jobs", extra={"event": "retrieval.list.completed"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger


__all__ = [
    "get_logger",
    "ComponentLoggerAdapter",
    "configure_logging",
    "ContextualFilter",
    "JSONFormatter",
    "KeyValueFormatter",
    "SERVICE_NAME",
    "log_context",
    "get_log_context",
    "push_log_context",
    "pop_log_context",
    "clear_log_context",
]
