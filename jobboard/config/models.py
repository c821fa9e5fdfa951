"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from jobboard.domain.models import SalaryCurrency, SalaryUnit
from jobboard.salary.rates import DEFAULT_CURRENCY_RATES, DEFAULT_UNIT_MULTIPLIERS


class StoreType(str, Enum):
    """Supported external record stores."""

    AIRTABLE = "airtable"


class MappingMode(str, Enum):
    """How listing and single-record lookups map raw records.

    ``unified`` applies the strict policy (validate + sanitize) to both paths.
    ``legacy`` keeps the historical split: permissive + sanitized listings,
    validated but unsanitized single lookups.
    """

    UNIFIED = "unified"
    LEGACY = "legacy"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class StoreConfig(BaseModel):
    """Record store settings."""

    type: StoreType = Field(StoreType.AIRTABLE, description="Record store backend")
    table_name: Optional[str] = Field(
        None, description="Table to read; overrides AIRTABLE_TABLE_NAME when set"
    )
    page_size: int = Field(100, ge=1, le=100, description="Records requested per page")
    max_records: int = Field(
        0, ge=0, description="Maximum records fetched per listing (0 = unlimited)"
    )

    @field_validator("table_name")
    @classmethod
    def strip_table_name(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; blank names fall back to the environment."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    model_config = {"use_enum_values": True, "validate_default": True}


class MappingConfig(BaseModel):
    """Record mapping settings."""

    mode: MappingMode = Field(MappingMode.UNIFIED, description="unified or legacy mapping")

    model_config = {"use_enum_values": True, "validate_default": True}


def _default_currency_rates() -> Dict[str, float]:
    return {currency.value: rate for currency, rate in DEFAULT_CURRENCY_RATES.items()}


def _default_unit_multipliers() -> Dict[str, float]:
    return {unit.value: multiplier for unit, multiplier in DEFAULT_UNIT_MULTIPLIERS.items()}


class SalaryConfig(BaseModel):
    """Static conversion tables used to annualize salaries.

    Partial tables are merged over the defaults, so every currency and unit
    always has a value.
    """

    currency_rates: Dict[str, float] = Field(
        default_factory=_default_currency_rates,
        description="USD-equivalent rate per currency",
    )
    unit_multipliers: Dict[str, float] = Field(
        default_factory=_default_unit_multipliers,
        description="Periods per year for each salary unit",
    )

    @field_validator("currency_rates")
    @classmethod
    def validate_currency_rates(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Upper-case currency codes, reject unknown codes and non-positive rates."""
        merged = _default_currency_rates()
        known = {currency.value for currency in SalaryCurrency}
        for code, rate in v.items():
            key = str(code).strip().upper()
            if key not in known:
                raise ValueError(f"Unknown currency '{code}'. Supported: {', '.join(sorted(known))}")
            if rate <= 0:
                raise ValueError(f"Rate for {key} must be positive, got: {rate}")
            merged[key] = rate
        return merged

    @field_validator("unit_multipliers")
    @classmethod
    def validate_unit_multipliers(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Lower-case unit names, reject unknown units and non-positive multipliers."""
        merged = _default_unit_multipliers()
        known = {unit.value for unit in SalaryUnit}
        for name, multiplier in v.items():
            key = str(name).strip().lower()
            if key not in known:
                raise ValueError(f"Unknown salary unit '{name}'. Supported: {', '.join(sorted(known))}")
            if multiplier <= 0:
                raise ValueError(f"Multiplier for {key} must be positive, got: {multiplier}")
            merged[key] = multiplier
        return merged


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AdvancedConfig(BaseModel):
    """Advanced runtime settings."""

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for record store calls (seconds)"
    )
    user_agent: str = Field(
        "JobBoard/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for the job board core.

    Every section has defaults, so an empty or missing config file is valid.
    """

    store: StoreConfig = Field(default_factory=StoreConfig, description="Record store settings")
    mapping: MappingConfig = Field(default_factory=MappingConfig, description="Mapping settings")
    salary: SalaryConfig = Field(default_factory=SalaryConfig, description="Salary conversion tables")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    advanced: AdvancedConfig = Field(
        default_factory=AdvancedConfig, description="Advanced runtime settings"
    )
