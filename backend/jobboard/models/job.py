import enum

from sqlalchemy import Column, DateTime, Enum, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from ..database import Base


class JobType(str, enum.Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"


class JobStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    CLOSED = "CLOSED"


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    company = Column(String(100), nullable=False, index=True)
    location = Column(String(100), nullable=True)
    job_type = Column(Enum(JobType, native_enum=False, length=20), nullable=False)
    status = Column(Enum(JobStatus, native_enum=False, length=20), nullable=False, default=JobStatus.ACTIVE)
    experience_level = Column(String(50), nullable=True)  # ENTRY / MID / SENIOR / EXECUTIVE
    department = Column(String(100), nullable=True)
    category = Column(String(100), nullable=True)  # IT, FINANCE, MARKETING, ...
    description = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    responsibilities = Column(Text, nullable=True)
    benefits = Column(Text, nullable=True)
    salary_min = Column(Numeric(14, 2, asdecimal=False), nullable=True)
    salary_max = Column(Numeric(14, 2, asdecimal=False), nullable=True)
    salary_currency = Column(String(3), nullable=True)
    work_mode = Column(String(50), nullable=True)  # REMOTE / ONSITE / HYBRID
    education_level = Column(String(100), nullable=True)  # HIGH_SCHOOL / BACHELOR / MASTER / PHD
    skills = Column(String(500), nullable=True)  # comma-separated
    company_info = Column(Text, nullable=True)
    company_logo_url = Column(String(500), nullable=True)
    # User id by value; deleting a job never touches the poster.
    posted_by = Column(Integer, nullable=True, index=True)
    application_deadline = Column(DateTime(timezone=True), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
