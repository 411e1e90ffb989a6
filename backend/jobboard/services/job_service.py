import logging
import re
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.job import Job, JobStatus, JobType
from ..schemas.job import CompanyOut, JobDetailOut, JobPayload
from ..utils.error_handlers import JobNotFoundError, ValidationError, get_error_message
from . import match_engine

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "INR": "₹", "JPY": "¥"}
JOB_TYPE_LABELS = {
    JobType.FULL_TIME: "Full-time",
    JobType.PART_TIME: "Part-time",
    JobType.CONTRACT: "Contract",
    JobType.INTERNSHIP: "Internship",
}
_BULLET_RE = re.compile(r"^\s*(?:[-*•]+|\d+[.)])\s*")


def validate_job_business_rules(payload: JobPayload) -> None:
    """Salary rules, checked after field validation has passed."""
    if payload.salary_min is not None and payload.salary_max is not None:
        if payload.salary_min >= payload.salary_max:
            raise ValidationError(get_error_message("salary_order"))

    if (payload.salary_min is not None or payload.salary_max is not None) and not payload.salary_currency:
        raise ValidationError(get_error_message("salary_currency"))


def _apply(payload: JobPayload, job: Job) -> None:
    job.title = payload.title
    job.company = payload.company
    job.location = payload.location
    job.job_type = payload.job_type
    job.status = payload.status
    job.experience_level = payload.experience_level
    job.department = payload.department
    job.category = payload.category
    job.description = payload.description
    job.requirements = payload.requirements
    job.responsibilities = payload.responsibilities
    job.benefits = payload.benefits
    job.salary_min = payload.salary_min
    job.salary_max = payload.salary_max
    job.salary_currency = payload.salary_currency
    job.work_mode = payload.work_mode
    job.education_level = payload.education_level
    job.skills = payload.skills
    job.company_info = payload.company_info
    job.company_logo_url = payload.company_logo_url
    job.application_deadline = payload.application_deadline
    job.start_date = payload.start_date


def create_job(db: Session, payload: JobPayload, caller_user_id: int | None) -> Job:
    validate_job_business_rules(payload)
    job = Job()
    _apply(payload, job)
    job.posted_by = payload.posted_by if payload.posted_by is not None else caller_user_id
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Created job id=%s posted_by=%s", job.id, job.posted_by)
    return job


def get_job(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if job is None:
        raise JobNotFoundError(job_id)
    return job


def update_job(db: Session, job_id: int, payload: JobPayload) -> Job:
    validate_job_business_rules(payload)
    job = get_job(db, job_id)
    _apply(payload, job)
    if payload.posted_by is not None:
        job.posted_by = payload.posted_by
    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, job_id: int) -> None:
    job = get_job(db, job_id)
    db.delete(job)
    db.commit()
    logger.info("Deleted job id=%s", job_id)


def list_jobs(
    db: Session,
    *,
    company: str | None = None,
    location: str | None = None,
    job_type: JobType | None = None,
    status: JobStatus | None = None,
    posted_by: int | None = None,
) -> list[Job]:
    """All jobs, narrowed by any filters given. Company and location match case-insensitively."""
    query = db.query(Job)
    if company and company.strip():
        query = query.filter(func.lower(Job.company) == company.strip().lower())
    if location and location.strip():
        query = query.filter(func.lower(Job.location) == location.strip().lower())
    if job_type is not None:
        query = query.filter(Job.job_type == job_type)
    if status is not None:
        query = query.filter(Job.status == status)
    if posted_by is not None:
        query = query.filter(Job.posted_by == posted_by)
    return query.order_by(Job.id.asc()).all()


def _format_amount(amount: float) -> str:
    if amount >= 1000:
        thousands = amount / 1000
        return f"{thousands:.0f}k" if thousands == int(thousands) else f"{thousands:.1f}k"
    return f"{amount:.0f}" if amount == int(amount) else f"{amount:.2f}"


def format_compensation(salary_min: float | None, salary_max: float | None, currency: str | None) -> str:
    """e.g. "$150k–$190k", "From €60k", "Not specified"."""
    if salary_min is None and salary_max is None:
        return "Not specified"

    code = (currency or "").upper()
    symbol = CURRENCY_SYMBOLS.get(code)

    def money(amount: float) -> str:
        if symbol:
            return f"{symbol}{_format_amount(amount)}"
        return f"{code} {_format_amount(amount)}".strip()

    if salary_min is not None and salary_max is not None:
        return f"{money(salary_min)}–{money(salary_max)}"
    if salary_min is not None:
        return f"From {money(salary_min)}"
    return f"Up to {money(salary_max)}"


def format_job_type(job_type: JobType | str | None) -> str:
    if job_type is None:
        return ""
    try:
        return JOB_TYPE_LABELS[JobType(job_type)]
    except ValueError:
        return str(job_type).replace("_", " ").capitalize()


def format_posted_at(created_at: datetime | None, now: datetime | None = None) -> str:
    if created_at is None:
        return ""
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = max(0, int((now - created_at).total_seconds()))
    if seconds < 3600:
        return "Just now"
    hours = seconds // 3600
    if hours < 24:
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    days = hours // 24
    if days < 30:
        return "1 day ago" if days == 1 else f"{days} days ago"
    months = days // 30
    if months < 12:
        return "1 month ago" if months == 1 else f"{months} months ago"
    years = days // 365
    return "1 year ago" if years <= 1 else f"{years} years ago"


def requirements_to_list(requirements: str | None) -> list[str]:
    """One entry per line, with list bullets or numbering stripped."""
    if not requirements:
        return []
    items = []
    for line in requirements.splitlines():
        item = _BULLET_RE.sub("", line).strip()
        if item:
            items.append(item)
    return items


def get_job_detail(db: Session, job_id: int, viewer_id: int | None = None) -> JobDetailOut:
    job = get_job(db, job_id)

    return JobDetailOut(
        id=str(job.id),
        role=job.title,
        company=CompanyOut(name=job.company, logo_url=job.company_logo_url),
        location=job.location,
        compensation=format_compensation(job.salary_min, job.salary_max, job.salary_currency),
        type=format_job_type(job.job_type),
        posted_at=format_posted_at(job.created_at),
        keywords=match_engine.skills_to_keywords(job.skills),
        description=job.description,
        requirements=requirements_to_list(job.requirements),
        company_info=job.company_info,
        similar_jobs=match_engine.similar_jobs_for(db, job),
        match_score=match_engine.calculate_match_score(job, viewer_id),
        match_factors=match_engine.get_match_factors(job, viewer_id),
        # saved-jobs tracking does not exist yet
        saved=False,
    )
