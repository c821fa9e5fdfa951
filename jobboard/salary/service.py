"""Salary display formatting and annualized comparison values.

Both functions accept a Salary or None and never raise on well-formed Salary
objects. A salary whose bounds are both missing or zero is "not specified":
it formats as "Not specified" and annualizes to -1, which ranks below every
real salary.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from jobboard.domain.models import Job, Salary, SalaryCurrency, SalaryUnit

from .rates import DEFAULT_RATE_PROVIDER, RateProvider

NOT_SPECIFIED = "Not specified"
UNSPECIFIED_VALUE = -1.0

CURRENCY_SYMBOLS: Dict[SalaryCurrency, str] = {
    SalaryCurrency.USD: "$",
    SalaryCurrency.EUR: "€",
    SalaryCurrency.GBP: "£",
}

UNIT_SUFFIXES: Dict[SalaryUnit, str] = {unit: f"/{unit.value}" for unit in SalaryUnit}

_ABBREVIATION_THRESHOLD = 10_000


def _is_unspecified(salary: Optional[Salary]) -> bool:
    return salary is None or not (salary.min or salary.max)


def format_amount(amount: float) -> str:
    """Format one salary bound.

    Amounts of 10,000 and above are shown in thousands with a ``k`` suffix,
    rounded half-up (``52500 -> "53k"``). Smaller amounts use thousands
    separators and at most three decimals (``5000 -> "5,000"``).
    """
    if amount >= _ABBREVIATION_THRESHOLD:
        thousands = (Decimal(str(amount)) / 1000).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return f"{thousands}k"
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.3f}".rstrip("0").rstrip(".")


def format_salary(salary: Optional[Salary]) -> str:
    """Format a salary for display.

    Args:
        salary: Salary to format, or None

    Returns:
        Display string such as ``"$50k-80k/year"`` or ``"€5,000/month"``;
        ``"Not specified"`` when no bound is published

    Example:
        >>> format_salary(Salary(min=50000, max=80000, currency="USD", unit="year"))
        '$50k-80k/year'
    """
    if _is_unspecified(salary):
        return NOT_SPECIFIED

    symbol = CURRENCY_SYMBOLS[SalaryCurrency(salary.currency)]
    suffix = UNIT_SUFFIXES[SalaryUnit(salary.unit)]

    if salary.min and salary.max and salary.min != salary.max:
        amount = f"{format_amount(salary.min)}-{format_amount(salary.max)}"
    else:
        amount = format_amount(salary.min or salary.max)

    return f"{symbol}{amount}{suffix}"


def annualized_salary_value(
    salary: Optional[Salary],
    rate_provider: Optional[RateProvider] = None,
) -> float:
    """Approximate yearly USD-equivalent value of a salary, for sorting.

    Uses the upper bound when it is non-zero, else the lower bound. The result
    is a ranking key only; the default rates are static approximations.

    Args:
        salary: Salary to annualize, or None
        rate_provider: Conversion factors (defaults to the static tables)

    Returns:
        Annualized value, or -1 when no bound is published
    """
    if _is_unspecified(salary):
        return UNSPECIFIED_VALUE

    provider = rate_provider or DEFAULT_RATE_PROVIDER
    # A zero bound counts as missing, same as in format_salary
    value = salary.max or salary.min or 0
    return value * provider.rate_for(salary.currency) * provider.multiplier_for(salary.unit)


def sort_jobs_by_salary(
    jobs: Iterable[Job],
    descending: bool = True,
    rate_provider: Optional[RateProvider] = None,
) -> List[Job]:
    """Sort jobs by annualized salary.

    The sort is stable, so jobs with equal values keep their input order. Jobs
    without a salary sort last when descending.
    """
    return sorted(
        jobs,
        key=lambda job: annualized_salary_value(job.salary, rate_provider),
        reverse=descending,
    )
