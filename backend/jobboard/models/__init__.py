from .job import Job, JobStatus, JobType
from .resume import Resume
from .user import User

__all__ = ["Job", "JobStatus", "JobType", "Resume", "User"]
