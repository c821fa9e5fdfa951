"""Currency and pay-period conversion rates for salary comparison.

The default rates are static approximations (USD-equivalent currency rates,
and a 2080-hour / 260-day working year). They exist to rank salaries against
each other, not to convert money. A live rate source can be plugged in by
implementing RateProvider.
"""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Union

from jobboard.domain.models import SalaryCurrency, SalaryUnit

DEFAULT_CURRENCY_RATES: Dict[SalaryCurrency, float] = {
    SalaryCurrency.USD: 1.0,
    SalaryCurrency.EUR: 1.1,
    SalaryCurrency.GBP: 1.27,
}

# Project pay is counted as a one-time, annual-equivalent amount.
DEFAULT_UNIT_MULTIPLIERS: Dict[SalaryUnit, float] = {
    SalaryUnit.HOUR: 2080.0,
    SalaryUnit.DAY: 260.0,
    SalaryUnit.WEEK: 52.0,
    SalaryUnit.MONTH: 12.0,
    SalaryUnit.YEAR: 1.0,
    SalaryUnit.PROJECT: 1.0,
}


class RateProvider(ABC):
    """Source of conversion factors used to annualize salaries."""

    @abstractmethod
    def rate_for(self, currency: Union[SalaryCurrency, str]) -> float:
        """Return the USD-equivalent rate of one unit of ``currency``."""

    @abstractmethod
    def multiplier_for(self, unit: Union[SalaryUnit, str]) -> float:
        """Return how many ``unit`` periods make up one year."""


class StaticRateProvider(RateProvider):
    """Rate provider backed by fixed tables.

    Overrides are merged over the defaults, so a partial table only replaces
    the entries it names.

    Attributes:
        currency_rates: Rate per currency
        unit_multipliers: Annual multiplier per salary unit
    """

    def __init__(
        self,
        currency_rates: Optional[Mapping[str, float]] = None,
        unit_multipliers: Optional[Mapping[str, float]] = None,
    ) -> None:
        self.currency_rates: Dict[SalaryCurrency, float] = dict(DEFAULT_CURRENCY_RATES)
        self.currency_rates.update(
            (SalaryCurrency(currency), float(rate)) for currency, rate in (currency_rates or {}).items()
        )
        self.unit_multipliers: Dict[SalaryUnit, float] = dict(DEFAULT_UNIT_MULTIPLIERS)
        self.unit_multipliers.update(
            (SalaryUnit(unit), float(multiplier)) for unit, multiplier in (unit_multipliers or {}).items()
        )

    @classmethod
    def from_config(cls, salary_config) -> "StaticRateProvider":
        """Build a provider from a SalaryConfig section."""
        return cls(
            currency_rates=salary_config.currency_rates,
            unit_multipliers=salary_config.unit_multipliers,
        )

    def rate_for(self, currency: Union[SalaryCurrency, str]) -> float:
        return self.currency_rates[SalaryCurrency(currency)]

    def multiplier_for(self, unit: Union[SalaryUnit, str]) -> float:
        return self.unit_multipliers[SalaryUnit(unit)]


DEFAULT_RATE_PROVIDER = StaticRateProvider()
