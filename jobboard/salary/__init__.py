"""Salary model: display formatting and annualized comparison values.

This module provides:
- format_salary: human-readable salary range
- annualized_salary_value: approximate yearly USD-equivalent sort key
- sort_jobs_by_salary: stable salary ordering for job lists
- RateProvider / StaticRateProvider: pluggable conversion factors
"""

from .rates import (
    DEFAULT_CURRENCY_RATES,
    DEFAULT_RATE_PROVIDER,
    DEFAULT_UNIT_MULTIPLIERS,
    RateProvider,
    StaticRateProvider,
)
from .service import (
    CURRENCY_SYMBOLS,
    NOT_SPECIFIED,
    UNIT_SUFFIXES,
    annualized_salary_value,
    format_amount,
    format_salary,
    sort_jobs_by_salary,
)

__all__ = [
    "format_salary",
    "format_amount",
    "annualized_salary_value",
    "sort_jobs_by_salary",
    "CURRENCY_SYMBOLS",
    "UNIT_SUFFIXES",
    "NOT_SPECIFIED",
    "RateProvider",
    "StaticRateProvider",
    "DEFAULT_RATE_PROVIDER",
    "DEFAULT_CURRENCY_RATES",
    "DEFAULT_UNIT_MULTIPLIERS",
]
