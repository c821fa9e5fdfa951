"""Field normalizers for raw record values.

Every normalizer is total: it accepts whatever the record store hands back
(missing values, odd casing, the wrong type) and always returns a valid
canonical value. Each field has two entry points:

- ``classify_<field>`` returns a NormalizationOutcome that records whether the
  value was recognized or defaulted, and why.
- ``normalize_<field>`` returns only the canonical value.

Unrecognized input is not an error here and is never logged; the outcome is
the diagnostic channel.
"""

import math
import re
from typing import Any, List, Optional

from jobboard.domain.languages import LANGUAGE_CODES, get_language_by_name
from jobboard.domain.models import (
    CareerLevel,
    RemoteRegion,
    SalaryCurrency,
    SalaryUnit,
    VisaSponsorship,
    WorkplaceType,
)

from .models import NormalizationOutcome

DEFAULT_CAREER_LEVELS = [CareerLevel.NOT_SPECIFIED.value]

# Store display values ("Entry Level", "Senior-Manager") keyed the way tokens
# are compared: separators removed, lower-cased.
_CAREER_LEVELS_BY_KEY = {level.value.lower(): level.value for level in CareerLevel}
_CAREER_LEVEL_SEPARATORS = re.compile(r"[\s\-_]+")

_WORKPLACE_LITERALS = frozenset(
    {WorkplaceType.ON_SITE.value, WorkplaceType.HYBRID.value, WorkplaceType.REMOTE.value}
)
_REMOTE_REGIONS = frozenset(region.value for region in RemoteRegion)
_VISA_VALUES = frozenset(value.value for value in VisaSponsorship)
_CURRENCIES = frozenset(currency.value for currency in SalaryCurrency)
_UNITS = frozenset(unit.value for unit in SalaryUnit)

# "German (de)", "Portuguese (Brazil) (PT)"
_LANGUAGE_CODE_SUFFIX = re.compile(r"\(([a-z]{2})\)$", re.IGNORECASE)


def _is_absent(value: Any) -> bool:
    """None, blank strings and empty sequences all count as absent."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


# ---------------------------------------------------------------------------
# Career level
# ---------------------------------------------------------------------------


def _career_level_from_token(token: Any) -> Optional[str]:
    if not isinstance(token, str):
        return None
    key = _CAREER_LEVEL_SEPARATORS.sub("", token).lower()
    return _CAREER_LEVELS_BY_KEY.get(key)


def classify_career_level(value: Any) -> NormalizationOutcome:
    """Normalize a career level field to a non-empty list of CareerLevel values.

    Accepts a single string or a list of strings in the store's display format
    ("Entry Level", "Senior Manager"). Whitespace and ``-``/``_`` separators
    are removed and tokens are matched case-insensitively. Order is preserved
    and duplicates are kept.

    Args:
        value: Raw field value

    Returns:
        Outcome whose value is never empty; ``["NotSpecified"]`` when nothing
        usable was found
    """
    if _is_absent(value):
        return NormalizationOutcome.absent(list(DEFAULT_CAREER_LEVELS))

    tokens = list(value) if isinstance(value, (list, tuple)) else [value]

    levels: List[str] = []
    rejected = []
    for token in tokens:
        level = _career_level_from_token(token)
        if level is None:
            rejected.append(token)
        else:
            levels.append(level)

    if not levels:
        return NormalizationOutcome.unrecognized(list(DEFAULT_CAREER_LEVELS), tuple(rejected))
    return NormalizationOutcome.recognized(levels, tuple(rejected))


def normalize_career_level(value: Any) -> List[str]:
    """Return the canonical career level list for a raw value."""
    return classify_career_level(value).value


# ---------------------------------------------------------------------------
# Workplace type and remote region
# ---------------------------------------------------------------------------


def classify_workplace_type(value: Any) -> NormalizationOutcome:
    """Accept exactly "On-site", "Hybrid" or "Remote"; anything else is "Not specified".

    The remote region is never used to infer a remote workplace.
    """
    default = WorkplaceType.NOT_SPECIFIED.value
    if isinstance(value, str) and value in _WORKPLACE_LITERALS:
        return NormalizationOutcome.recognized(value)
    if _is_absent(value) or value == default:
        return NormalizationOutcome.absent(default)
    return NormalizationOutcome.unrecognized(default)


def normalize_workplace_type(value: Any) -> str:
    """Return the canonical workplace type for a raw value."""
    return classify_workplace_type(value).value


def classify_remote_region(value: Any) -> NormalizationOutcome:
    """Accept one of the eight known region labels verbatim, else None."""
    if isinstance(value, str) and value in _REMOTE_REGIONS:
        return NormalizationOutcome.recognized(value)
    if _is_absent(value):
        return NormalizationOutcome.absent(None)
    return NormalizationOutcome.unrecognized(None)


def normalize_remote_region(value: Any) -> Optional[str]:
    """Return the canonical remote region for a raw value."""
    return classify_remote_region(value).value


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------


def resolve_language_code(item: Any) -> Optional[str]:
    """Resolve one raw language token to an ISO 639-1 code.

    Tries, in order:
    1. A trailing ``(xx)`` code, case-insensitive ("French (FR)" -> "fr")
    2. The token itself as a two-letter code, case-insensitive ("DE" -> "de")
    3. The token as an English display name, case-sensitive ("Spanish" -> "es")

    Args:
        item: Raw token from the languages field

    Returns:
        Lower-case code, or None if no strategy matched
    """
    if not isinstance(item, str):
        return None
    token = item.strip()

    match = _LANGUAGE_CODE_SUFFIX.search(token)
    if match:
        code = match.group(1).lower()
        if code in LANGUAGE_CODES:
            return code

    if len(token) == 2 and token.lower() in LANGUAGE_CODES:
        return token.lower()

    language = get_language_by_name(token)
    if language is not None:
        return language.code

    return None


def classify_languages(value: Any) -> NormalizationOutcome:
    """Normalize a languages field to a list of ISO 639-1 codes.

    Non-list input yields an empty list. Tokens that cannot be resolved are
    dropped and reported in ``rejected``. Duplicates are preserved.
    """
    if _is_absent(value):
        return NormalizationOutcome.absent([])
    if not isinstance(value, (list, tuple)):
        return NormalizationOutcome.unrecognized([], (value,))

    codes: List[str] = []
    rejected = []
    for item in value:
        code = resolve_language_code(item)
        if code is None:
            rejected.append(item)
        else:
            codes.append(code)

    if not codes:
        return NormalizationOutcome.unrecognized([], tuple(rejected))
    return NormalizationOutcome.recognized(codes, tuple(rejected))


def normalize_languages(value: Any) -> List[str]:
    """Return the canonical language code list for a raw value."""
    return classify_languages(value).value


# ---------------------------------------------------------------------------
# Scalar fields
# ---------------------------------------------------------------------------


def classify_visa_sponsorship(value: Any) -> NormalizationOutcome:
    """Accept "Yes", "No" or "Not specified" verbatim; default "Not specified"."""
    default = VisaSponsorship.NOT_SPECIFIED.value
    if isinstance(value, str) and value in _VISA_VALUES:
        return NormalizationOutcome.recognized(value)
    if _is_absent(value):
        return NormalizationOutcome.absent(default)
    return NormalizationOutcome.unrecognized(default)


def normalize_visa_sponsorship(value: Any) -> str:
    return classify_visa_sponsorship(value).value


def classify_featured(value: Any) -> NormalizationOutcome:
    """Only a boolean True marks a job as featured."""
    if isinstance(value, bool):
        return NormalizationOutcome.recognized(value)
    if value is None:
        return NormalizationOutcome.absent(False)
    return NormalizationOutcome.unrecognized(False)


def normalize_featured(value: Any) -> bool:
    return classify_featured(value).value


def classify_optional_text(value: Any) -> NormalizationOutcome:
    """Stripped non-empty string, else None."""
    if _is_absent(value):
        return NormalizationOutcome.absent(None)
    if isinstance(value, str):
        return NormalizationOutcome.recognized(value.strip())
    return NormalizationOutcome.unrecognized(None)


def normalize_optional_text(value: Any) -> Optional[str]:
    return classify_optional_text(value).value


def classify_salary_bound(value: Any) -> NormalizationOutcome:
    """Normalize a salary amount to a positive float.

    Zero is treated like a missing bound. Numeric strings with thousands
    separators are accepted; negatives, booleans and garbage are not.
    """
    if _is_absent(value):
        return NormalizationOutcome.absent(None)
    if isinstance(value, bool):
        return NormalizationOutcome.unrecognized(None)

    amount: Optional[float] = None
    if isinstance(value, (int, float)):
        amount = float(value)
    elif isinstance(value, str):
        try:
            amount = float(value.strip().replace(",", ""))
        except ValueError:
            amount = None

    if amount is None or not math.isfinite(amount) or amount < 0:
        return NormalizationOutcome.unrecognized(None)
    if amount == 0:
        return NormalizationOutcome.absent(None)
    return NormalizationOutcome.recognized(amount)


def normalize_salary_bound(value: Any) -> Optional[float]:
    return classify_salary_bound(value).value


def classify_salary_currency(value: Any) -> NormalizationOutcome:
    """Accept a known currency code in any case; default USD."""
    default = SalaryCurrency.USD.value
    if isinstance(value, str) and value.strip().upper() in _CURRENCIES:
        return NormalizationOutcome.recognized(value.strip().upper())
    if _is_absent(value):
        return NormalizationOutcome.absent(default)
    return NormalizationOutcome.unrecognized(default)


def normalize_salary_currency(value: Any) -> str:
    return classify_salary_currency(value).value


def classify_salary_unit(value: Any) -> NormalizationOutcome:
    """Accept a known salary unit in any case; default "year"."""
    default = SalaryUnit.YEAR.value
    if isinstance(value, str) and value.strip().lower() in _UNITS:
        return NormalizationOutcome.recognized(value.strip().lower())
    if _is_absent(value):
        return NormalizationOutcome.absent(default)
    return NormalizationOutcome.unrecognized(default)


def normalize_salary_unit(value: Any) -> str:
    return classify_salary_unit(value).value
