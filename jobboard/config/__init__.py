"""Configuration management module for the job board core."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AdvancedConfig,
    AppConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MappingConfig,
    MappingMode,
    SalaryConfig,
    StoreConfig,
    StoreType,
)

__all__ = [
    # Main loader functions
    "load_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "StoreConfig",
    "MappingConfig",
    "SalaryConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "StoreType",
    "MappingMode",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
