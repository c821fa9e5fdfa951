"""Core domain models for job postings and their salaries.

This module defines the data structures used throughout the application:
- RawRecord: a record exactly as the external record store returns it
- Salary: structured salary value object
- Job: canonical, normalized job posting consumed by presentation code

Enumerations mirror the fixed vocabularies of the job board. Models store plain
enum values (``use_enum_values``) so consumers can compare against literals.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class EmploymentType(str, Enum):
    """Employment arrangement of a posting."""

    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    FREELANCE = "Freelance"


class CareerLevel(str, Enum):
    """Seniority levels a posting can target."""

    INTERNSHIP = "Internship"
    ENTRY_LEVEL = "EntryLevel"
    ASSOCIATE = "Associate"
    JUNIOR = "Junior"
    MID_LEVEL = "MidLevel"
    SENIOR = "Senior"
    STAFF = "Staff"
    PRINCIPAL = "Principal"
    LEAD = "Lead"
    MANAGER = "Manager"
    SENIOR_MANAGER = "SeniorManager"
    DIRECTOR = "Director"
    SENIOR_DIRECTOR = "SeniorDirector"
    VP = "VP"
    SVP = "SVP"
    EVP = "EVP"
    C_LEVEL = "CLevel"
    FOUNDER = "Founder"
    NOT_SPECIFIED = "NotSpecified"


class VisaSponsorship(str, Enum):
    """Tri-state visa sponsorship flag."""

    YES = "Yes"
    NO = "No"
    NOT_SPECIFIED = "Not specified"


class WorkplaceType(str, Enum):
    """Where the work happens."""

    ON_SITE = "On-site"
    HYBRID = "Hybrid"
    REMOTE = "Remote"
    NOT_SPECIFIED = "Not specified"


class RemoteRegion(str, Enum):
    """Geographic restriction for remote roles."""

    WORLDWIDE = "Worldwide"
    AMERICAS_ONLY = "Americas Only"
    EUROPE_ONLY = "Europe Only"
    ASIA_PACIFIC_ONLY = "Asia-Pacific Only"
    US_ONLY = "US Only"
    EU_ONLY = "EU Only"
    UK_EU_ONLY = "UK/EU Only"
    US_CANADA_ONLY = "US/Canada Only"


class JobStatus(str, Enum):
    """Publication status; only active postings are ever listed."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class SalaryCurrency(str, Enum):
    """Supported salary currencies."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class SalaryUnit(str, Enum):
    """Period a salary amount refers to."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    PROJECT = "project"


class RawRecord(BaseModel):
    """Record as returned by the external record store, before mapping.

    The ``fields`` mapping is loosely typed: values may be missing, mis-cased,
    or encoded differently from record to record. The record mapper turns it
    into a Job.
    """

    id: str = Field(..., description="Record ID assigned by the store")
    fields: Dict[str, Any] = Field(default_factory=dict, description="Raw field values")
    created_time: Optional[str] = Field(None, description="Store creation timestamp")

    @field_validator("id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        """Strip whitespace from the record ID."""
        if not v or not v.strip():
            raise ValueError("Record ID cannot be empty or whitespace-only")
        return v.strip()

    model_config = {"json_schema_extra": {"example": {
        "id": "recA1b2C3d4E5f6G7",
        "fields": {
            "title": "Senior Data Engineer",
            "company": "Example Corp",
            "type": "Full-time",
            "career_level": ["Senior"],
            "languages": ["English (en)"],
            "status": "active",
        },
        "created_time": "2025-11-01T12:00:00.000Z",
    }}}


class Salary(BaseModel):
    """Structured salary range.

    Either bound may be missing. ``min <= max`` is not enforced; formatting and
    annualization treat the bounds independently.
    """

    min: Optional[float] = Field(None, ge=0, description="Lower bound")
    max: Optional[float] = Field(None, ge=0, description="Upper bound")
    currency: SalaryCurrency = Field(SalaryCurrency.USD, description="ISO currency code")
    unit: SalaryUnit = Field(SalaryUnit.YEAR, description="Period the amounts refer to")

    @property
    def is_specified(self) -> bool:
        """Whether at least one bound carries a non-zero amount."""
        return bool(self.min) or bool(self.max)

    model_config = {
        "use_enum_values": True,
        "validate_default": True,
        "json_schema_extra": {"example": {
            "min": 50000,
            "max": 80000,
            "currency": "USD",
            "unit": "year",
        }},
    }


class Job(BaseModel):
    """Canonical job posting.

    Produced fresh by the retrieval service on every call. Classification and
    location fields are already normalized to their fixed vocabularies; the
    description has been through the markdown sanitizer when the mapping policy
    asks for it.
    """

    id: str = Field(..., description="Record ID assigned by the store")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Hiring company")
    type: EmploymentType = Field(..., description="Employment type")
    salary: Optional[Salary] = Field(None, description="Salary range, if published")
    description: str = Field(..., description="Markdown job description")
    apply_url: str = Field(..., description="External application URL")
    posted_date: str = Field(..., description="ISO date the job was posted")
    status: JobStatus = Field(..., description="Publication status")
    career_level: List[CareerLevel] = Field(
        default_factory=lambda: [CareerLevel.NOT_SPECIFIED],
        min_length=1,
        description="Targeted career levels, in source order",
    )
    visa_sponsorship: VisaSponsorship = Field(
        VisaSponsorship.NOT_SPECIFIED, description="Visa sponsorship availability"
    )
    featured: bool = Field(False, description="Whether the job is featured")
    workplace_type: WorkplaceType = Field(
        WorkplaceType.NOT_SPECIFIED, description="On-site, hybrid or remote"
    )
    remote_region: Optional[RemoteRegion] = Field(
        None, description="Region restriction for remote jobs"
    )
    timezone_requirements: Optional[str] = Field(None, description="Free-text timezone needs")
    workplace_city: Optional[str] = Field(None, description="City of the workplace")
    workplace_country: Optional[str] = Field(None, description="Country of the workplace")
    languages: List[str] = Field(default_factory=list, description="ISO 639-1 language codes")

    @field_validator("id", "title", "company", "description", "apply_url", "posted_date")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from required string fields."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("timezone_requirements", "workplace_city", "workplace_country")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        """Strip optional text fields; blank values become None."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None

    @property
    def is_active(self) -> bool:
        """Whether the posting is currently published."""
        return self.status == JobStatus.ACTIVE.value

    model_config = {
        "use_enum_values": True,
        "validate_default": True,
        "json_schema_extra": {"example": {
            "id": "recA1b2C3d4E5f6G7",
            "title": "Senior Data Engineer",
            "company": "Example Corp",
            "type": "Full-time",
            "salary": {"min": 50000, "max": 80000, "currency": "USD", "unit": "year"},
            "description": "**About the role:** Build data pipelines.",
            "apply_url": "https://example.com/careers/123",
            "posted_date": "2025-11-01",
            "status": "active",
            "career_level": ["Senior"],
            "visa_sponsorship": "Not specified",
            "featured": False,
            "workplace_type": "Remote",
            "remote_region": "Europe Only",
            "timezone_requirements": "CET +/- 2h",
            "workplace_city": None,
            "workplace_country": None,
            "languages": ["en", "de"],
        }},
    }
