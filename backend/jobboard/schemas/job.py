from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, Field, field_validator

from ..models.job import JobStatus, JobType
from ..utils.validation import (
    CURRENCY_PATTERN,
    EDUCATION_LEVELS,
    EXPERIENCE_LEVELS,
    WORK_MODES,
    validate_choice,
)
from .base import CamelModel


def _max_length(limit: int, message: str):
    def check(v: str | None) -> str | None:
        if v is not None and len(v) > limit:
            raise ValueError(message)
        return v
    return check


def _as_utc(value: datetime) -> datetime:
    # naive datetimes are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class JobPayload(CamelModel):
    """Fields accepted on create and update (PUT replaces every field)."""

    title: str
    company: str
    location: Annotated[str | None, AfterValidator(_max_length(100, "Location must not exceed 100 characters"))] = None
    job_type: JobType
    status: JobStatus = JobStatus.ACTIVE
    experience_level: str | None = None
    department: Annotated[str | None, AfterValidator(_max_length(100, "Department must not exceed 100 characters"))] = None
    category: Annotated[str | None, AfterValidator(_max_length(100, "Category must not exceed 100 characters"))] = None
    description: str
    requirements: Annotated[str | None, AfterValidator(_max_length(5000, "Requirements must not exceed 5000 characters"))] = None
    responsibilities: Annotated[str | None, AfterValidator(_max_length(5000, "Responsibilities must not exceed 5000 characters"))] = None
    benefits: Annotated[str | None, AfterValidator(_max_length(3000, "Benefits must not exceed 3000 characters"))] = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    work_mode: str | None = None
    education_level: str | None = None
    skills: Annotated[str | None, AfterValidator(_max_length(500, "Skills must not exceed 500 characters"))] = None
    company_info: Annotated[str | None, AfterValidator(_max_length(5000, "Company info must not exceed 5000 characters"))] = None
    company_logo_url: Annotated[str | None, AfterValidator(_max_length(500, "Company logo URL must not exceed 500 characters"))] = None
    posted_by: int | None = None
    application_deadline: datetime | None = None
    start_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Job title is required")
        if len(v) < 3 or len(v) > 200:
            raise ValueError("Job title must be between 3 and 200 characters")
        return v

    @field_validator("company")
    @classmethod
    def _check_company(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Company name is required")
        if len(v) < 2 or len(v) > 100:
            raise ValueError("Company name must be between 2 and 100 characters")
        return v

    @field_validator("description")
    @classmethod
    def _check_description(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Job description is required")
        if len(v) < 50 or len(v) > 5000:
            raise ValueError("Description must be between 50 and 5000 characters")
        return v

    @field_validator("experience_level")
    @classmethod
    def _check_experience_level(cls, v: str | None) -> str | None:
        return validate_choice(v, EXPERIENCE_LEVELS, "Experience level must be ENTRY, MID, SENIOR, or EXECUTIVE")

    @field_validator("work_mode")
    @classmethod
    def _check_work_mode(cls, v: str | None) -> str | None:
        return validate_choice(v, WORK_MODES, "Work mode must be REMOTE, ONSITE, or HYBRID")

    @field_validator("education_level")
    @classmethod
    def _check_education_level(cls, v: str | None) -> str | None:
        return validate_choice(v, EDUCATION_LEVELS, "Education level must be HIGH_SCHOOL, BACHELOR, MASTER, or PHD")

    @field_validator("salary_min")
    @classmethod
    def _check_salary_min(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("Minimum salary must be greater than 0")
        return v

    @field_validator("salary_max")
    @classmethod
    def _check_salary_max(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("Maximum salary must be greater than 0")
        return v

    @field_validator("salary_currency")
    @classmethod
    def _check_currency(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not CURRENCY_PATTERN.match(v):
            raise ValueError("Currency must be a valid 3-letter code (e.g., USD, EUR, INR)")
        return v

    @field_validator("application_deadline", "start_date")
    @classmethod
    def _normalize_dates(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v) if v is not None else None


class JobCreate(JobPayload):
    @field_validator("application_deadline")
    @classmethod
    def _deadline_in_future(cls, v: datetime | None) -> datetime | None:
        if v is not None and _as_utc(v) <= datetime.now(timezone.utc):
            raise ValueError("Application deadline must be a future date")
        return v

    @field_validator("start_date")
    @classmethod
    def _start_in_future(cls, v: datetime | None) -> datetime | None:
        if v is not None and _as_utc(v) <= datetime.now(timezone.utc):
            raise ValueError("Start date must be a future date")
        return v


class JobUpdate(JobPayload):
    pass


class JobOut(CamelModel):
    id: int
    title: str
    company: str
    location: str | None = None
    job_type: JobType
    status: JobStatus
    experience_level: str | None = None
    department: str | None = None
    category: str | None = None
    description: str | None = None
    requirements: str | None = None
    responsibilities: str | None = None
    benefits: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    work_mode: str | None = None
    education_level: str | None = None
    skills: str | None = None
    company_info: str | None = None
    company_logo_url: str | None = None
    posted_by: int | None = None
    application_deadline: datetime | None = None
    start_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompanyOut(CamelModel):
    name: str
    logo_url: str | None = None


class SimilarJobOut(CamelModel):
    id: str
    title: str
    company: str
    match_percent: int


class MatchFactorOut(CamelModel):
    label: str
    weight: float
    score: float


class JobDetailOut(CamelModel):
    """Candidate-facing view of a single job."""

    id: str
    role: str
    company: CompanyOut
    location: str | None = None
    compensation: str
    type: str
    posted_at: str
    keywords: list[str] = Field(default_factory=list)
    description: str | None = None
    requirements: list[str] = Field(default_factory=list)
    company_info: str | None = None
    similar_jobs: list[SimilarJobOut] = Field(default_factory=list)
    match_score: int = 0
    match_factors: list[MatchFactorOut] = Field(default_factory=list)
    saved: bool = False
