"""Normalization layer for converting raw store records to canonical Job models.

This module provides:
- Field normalizers for every loosely-typed record field (see ``fields``)
- sanitize_markdown: ordered cleanup pipeline for description markdown
- NormalizationOutcome: tagged result of a field normalizer
- MappingPolicy: how strictly a record is mapped (strict or legacy presets)
- RecordMapper: service to convert a raw record into a Job
"""

from .exceptions import RecordMappingError
from .markdown import SANITIZER_STAGES, RewriteStage, sanitize_markdown
from .models import (
    LEGACY_LISTING,
    LEGACY_SINGLE,
    STRICT,
    MappingPolicy,
    MappingResult,
    NormalizationOutcome,
    OutcomeStatus,
)
from .service import REQUIRED_FIELDS, RecordMapper

__all__ = [
    "RecordMapper",
    "RecordMappingError",
    "REQUIRED_FIELDS",
    "MappingPolicy",
    "MappingResult",
    "NormalizationOutcome",
    "OutcomeStatus",
    "STRICT",
    "LEGACY_LISTING",
    "LEGACY_SINGLE",
    "RewriteStage",
    "SANITIZER_STAGES",
    "sanitize_markdown",
]
