"""Domain models for the job board core."""

from .languages import LANGUAGE_CODES, Language, get_display_name_from_code, get_language_by_name
from .models import (
    CareerLevel,
    EmploymentType,
    Job,
    JobStatus,
    RawRecord,
    RemoteRegion,
    Salary,
    SalaryCurrency,
    SalaryUnit,
    VisaSponsorship,
    WorkplaceType,
)

__all__ = [
    "Job",
    "RawRecord",
    "Salary",
    "CareerLevel",
    "EmploymentType",
    "JobStatus",
    "RemoteRegion",
    "SalaryCurrency",
    "SalaryUnit",
    "VisaSponsorship",
    "WorkplaceType",
    "Language",
    "LANGUAGE_CODES",
    "get_language_by_name",
    "get_display_name_from_code",
]
