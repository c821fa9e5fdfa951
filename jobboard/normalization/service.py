"""Record mapping service for converting raw store records to Job domain models.

This module implements the mapping logic that:
1. Checks the required fields of a raw record
2. Runs every optional field through its field normalizer
3. Builds the structured Salary when at least one bound is published
4. Sanitizes the description markdown when the policy asks for it
5. Validates (or, for the permissive policy, just constructs) the Job
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from jobboard.domain.models import Job, RawRecord, Salary
from jobboard.logging import get_logger

from . import fields as field_normalizers
from .exceptions import RecordMappingError
from .markdown import sanitize_markdown
from .models import MappingPolicy, MappingResult, NormalizationOutcome

logger = get_logger(__name__, component="normalization")

REQUIRED_FIELDS = (
    "title",
    "company",
    "type",
    "description",
    "apply_url",
    "posted_date",
    "status",
)

# Optional Job field -> classifier for its raw value
_FIELD_CLASSIFIERS = {
    "career_level": field_normalizers.classify_career_level,
    "visa_sponsorship": field_normalizers.classify_visa_sponsorship,
    "featured": field_normalizers.classify_featured,
    "workplace_type": field_normalizers.classify_workplace_type,
    "remote_region": field_normalizers.classify_remote_region,
    "timezone_requirements": field_normalizers.classify_optional_text,
    "workplace_city": field_normalizers.classify_optional_text,
    "workplace_country": field_normalizers.classify_optional_text,
    "languages": field_normalizers.classify_languages,
}

_SALARY_CLASSIFIERS = {
    "salary_min": field_normalizers.classify_salary_bound,
    "salary_max": field_normalizers.classify_salary_bound,
    "salary_currency": field_normalizers.classify_salary_currency,
    "salary_unit": field_normalizers.classify_salary_unit,
}


def find_missing_fields(fields: Mapping[str, Any]) -> List[str]:
    """Return the required fields that are absent or falsy, in declaration order."""
    return [name for name in REQUIRED_FIELDS if not fields.get(name)]


def _format_validation_errors(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    )


class RecordMapper:
    """Maps raw store records into canonical Job domain models.

    Responsibilities:
    - Enforce required fields (strict policies only)
    - Normalize classification, location and language fields
    - Build the Salary value object
    - Sanitize the description (policies with ``sanitize_description``)
    - Record a NormalizationOutcome per normalized field
    """

    def __init__(
        self,
        policy: Optional[MappingPolicy] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize RecordMapper.

        Args:
            policy: Mapping policy. Defaults to MappingPolicy.strict()
            logger_instance: Logger instance (defaults to module logger)
        """
        self.policy = policy or MappingPolicy.strict()
        self.logger = logger_instance or logger

    def map_raw_record(self, raw: RawRecord) -> MappingResult:
        """Map a RawRecord as returned by a record store."""
        return self.map_record(raw.id, raw.fields)

    def map_record(self, record_id: str, fields: Optional[Mapping[str, Any]]) -> MappingResult:
        """Map one raw record into a Job.

        Args:
            record_id: Store-assigned record ID
            fields: Raw field values of the record

        Returns:
            MappingResult with the Job and per-field normalization outcomes

        Raises:
            RecordMappingError: If the policy validates required fields and one
                is missing, or the assembled Job fails validation
        """
        fields = fields or {}

        if self.policy.validate_required_fields:
            missing = find_missing_fields(fields)
            if missing:
                raise RecordMappingError(
                    record_id,
                    f"missing required fields: {', '.join(missing)}",
                    missing_fields=missing,
                )

        outcomes: Dict[str, NormalizationOutcome] = {
            name: classify(fields.get(name)) for name, classify in _FIELD_CLASSIFIERS.items()
        }
        outcomes.update(
            (name, classify(fields.get(name))) for name, classify in _SALARY_CLASSIFIERS.items()
        )

        description = fields.get("description")
        if self.policy.sanitize_description:
            description = sanitize_markdown(description)

        data = {
            "id": record_id,
            "title": fields.get("title"),
            "company": fields.get("company"),
            "type": fields.get("type"),
            "salary": self._build_salary(outcomes),
            "description": description,
            "apply_url": fields.get("apply_url"),
            "posted_date": fields.get("posted_date"),
            "status": fields.get("status"),
        }
        data.update((name, outcomes[name].value) for name in _FIELD_CLASSIFIERS)

        if self.policy.validate_required_fields:
            try:
                job = Job.model_validate(data)
            except ValidationError as e:
                raise RecordMappingError(record_id, _format_validation_errors(e)) from e
        else:
            job = Job.model_construct(**data)

        result = MappingResult(job=job, record_id=record_id, policy=self.policy, outcomes=outcomes)

        self.logger.debug(
            "Mapped record",
            extra={
                "event": "normalization.record.mapped",
                "record_id": record_id,
                "policy": self.policy.name,
                "defaulted_fields": result.defaulted_fields,
            },
        )

        return result

    @staticmethod
    def _build_salary(outcomes: Mapping[str, NormalizationOutcome]) -> Optional[Salary]:
        """Build a Salary when at least one bound is published, else None."""
        minimum = outcomes["salary_min"].value
        maximum = outcomes["salary_max"].value
        if minimum is None and maximum is None:
            return None
        return Salary(
            min=minimum,
            max=maximum,
            currency=outcomes["salary_currency"].value,
            unit=outcomes["salary_unit"].value,
        )
