"""Data models for the normalization layer.

This module defines the tagged outcome produced by every field normalizer, the
policy that controls how strictly a raw record is mapped, and the result of
mapping one record into a Job.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from jobboard.domain.models import Job


class OutcomeStatus(str, Enum):
    """Why a normalizer produced the value it did."""

    RECOGNIZED = "recognized"
    DEFAULTED_FROM_ABSENT = "defaulted_from_absent"
    DEFAULTED_FROM_UNRECOGNIZED = "defaulted_from_unrecognized"


@dataclass(frozen=True)
class NormalizationOutcome:
    """Value produced by a field normalizer, tagged with its cause.

    Public callers only ever see ``value``; the status lets tests and
    diagnostics tell "the field was missing" apart from "the field held
    something we could not recognize", which both collapse to the same default.

    Attributes:
        value: Canonical value (default value when not recognized)
        status: How the value was obtained
        rejected: Raw tokens that were dropped (list-valued fields only)
    """

    value: Any
    status: OutcomeStatus
    rejected: Tuple[Any, ...] = ()

    @classmethod
    def recognized(cls, value: Any, rejected: Tuple[Any, ...] = ()) -> "NormalizationOutcome":
        return cls(value=value, status=OutcomeStatus.RECOGNIZED, rejected=rejected)

    @classmethod
    def absent(cls, default: Any) -> "NormalizationOutcome":
        return cls(value=default, status=OutcomeStatus.DEFAULTED_FROM_ABSENT)

    @classmethod
    def unrecognized(cls, default: Any, rejected: Tuple[Any, ...] = ()) -> "NormalizationOutcome":
        return cls(value=default, status=OutcomeStatus.DEFAULTED_FROM_UNRECOGNIZED, rejected=rejected)

    @property
    def is_default(self) -> bool:
        """Whether the value is a default rather than a recognized input."""
        return self.status is not OutcomeStatus.RECOGNIZED


@dataclass(frozen=True)
class MappingPolicy:
    """How strictly a raw record is turned into a Job.

    The listing and single-record paths historically behaved differently: the
    listing path cast fields without validation but sanitized descriptions,
    while the single-record path validated required fields but left the
    description untouched. Both behaviors are available as named presets;
    ``strict()`` is the unified default.

    Attributes:
        name: Label used in logs
        validate_required_fields: Reject records missing required fields and
            validate the resulting Job; when False the Job is built without
            validation
        sanitize_description: Run the description through the markdown sanitizer
    """

    name: str = "strict"
    validate_required_fields: bool = True
    sanitize_description: bool = True

    @classmethod
    def strict(cls) -> "MappingPolicy":
        return cls()

    @classmethod
    def legacy_listing(cls) -> "MappingPolicy":
        return cls(name="legacy-listing", validate_required_fields=False, sanitize_description=True)

    @classmethod
    def legacy_single(cls) -> "MappingPolicy":
        return cls(name="legacy-single", validate_required_fields=True, sanitize_description=False)


@dataclass
class MappingResult:
    """Result of mapping one raw record.

    Attributes:
        job: The canonical Job
        record_id: Store-assigned ID of the source record
        policy: Policy the record was mapped under
        outcomes: Normalization outcome per normalized field
    """

    job: Job
    record_id: str
    policy: MappingPolicy
    outcomes: Dict[str, NormalizationOutcome] = field(default_factory=dict)

    @property
    def defaulted_fields(self) -> List[str]:
        """Names of fields that fell back to a default value."""
        return [name for name, outcome in self.outcomes.items() if outcome.is_default]

    @property
    def unrecognized_fields(self) -> List[str]:
        """Names of fields whose raw value was present but not understood."""
        return [
            name
            for name, outcome in self.outcomes.items()
            if outcome.status is OutcomeStatus.DEFAULTED_FROM_UNRECOGNIZED
            or outcome.rejected
        ]


STRICT = MappingPolicy.strict()
LEGACY_LISTING = MappingPolicy.legacy_listing()
LEGACY_SINGLE = MappingPolicy.legacy_single()
