"""
Job routes. Reads are public; writes need a bearer token.

Public reads carry no identity, so the detail view takes the viewer from the
`userId` query parameter.
"""
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.job import JobStatus, JobType
from ..schemas.job import JobCreate, JobDetailOut, JobOut, JobUpdate, SimilarJobOut
from ..services import job_service, match_engine
from ..utils.dependencies import AuthContext, require_auth

router = APIRouter(prefix="/api/v1/job", tags=["Jobs"])


@router.get("", response_model=list[JobOut])
def list_jobs(
    company: str | None = None,
    location: str | None = None,
    job_type: JobType | None = Query(default=None, alias="jobType"),
    status: JobStatus | None = None,
    posted_by: int | None = Query(default=None, alias="postedBy"),
    db: Session = Depends(get_db),
):
    return job_service.list_jobs(
        db,
        company=company,
        location=location,
        job_type=job_type,
        status=status,
        posted_by=posted_by,
    )


@router.get("/{job_id}", response_model=JobOut)
def get_job(job_id: int, db: Session = Depends(get_db)):
    return job_service.get_job(db, job_id)


@router.get("/{job_id}/detail", response_model=JobDetailOut)
def get_job_detail(
    job_id: int,
    user_id: int | None = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
):
    return job_service.get_job_detail(db, job_id, user_id)


@router.get("/{job_id}/similar", response_model=list[SimilarJobOut])
def get_similar_jobs(
    job_id: int,
    limit: int = Query(default=match_engine.DEFAULT_SIMILAR_LIMIT, ge=1, le=50),
    db: Session = Depends(get_db),
):
    return match_engine.get_similar_jobs(db, job_id, limit)


@router.post("", response_model=JobOut, status_code=201)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return job_service.create_job(db, payload, auth.user_id)


@router.put("/{job_id}", response_model=JobOut, dependencies=[Depends(require_auth)])
def update_job(job_id: int, payload: JobUpdate, db: Session = Depends(get_db)):
    return job_service.update_job(db, job_id, payload)


@router.delete("/{job_id}", status_code=204, dependencies=[Depends(require_auth)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    job_service.delete_job(db, job_id)
    return Response(status_code=204)
