from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.resume import ResumeOut
from ..services import resume_service
from ..utils.dependencies import require_auth

router = APIRouter(prefix="/api/v1/resumes", tags=["Resumes"], dependencies=[Depends(require_auth)])


@router.post("/upload/{user_id}", response_model=ResumeOut, status_code=201)
def upload_resume(
    user_id: int,
    file: UploadFile = File(...),
    description: str | None = Form(default=None),
    db: Session = Depends(get_db),
):
    return resume_service.upload_resume(db, user_id, file, description)


@router.get("/user/{user_id}", response_model=list[ResumeOut])
def list_resumes(user_id: int, db: Session = Depends(get_db)):
    return resume_service.list_resumes(db, user_id)


@router.get("/user/{user_id}/primary", response_model=ResumeOut)
def get_primary_resume(user_id: int, db: Session = Depends(get_db)):
    return resume_service.get_primary_resume(db, user_id)


@router.put("/user/{user_id}/primary/{resume_id}", response_model=ResumeOut)
def set_primary_resume(user_id: int, resume_id: int, db: Session = Depends(get_db)):
    return resume_service.set_primary_resume(db, user_id, resume_id)


@router.get("/user/{user_id}/download/{resume_id}")
def download_resume(user_id: int, resume_id: int, db: Session = Depends(get_db)):
    resume, path = resume_service.get_resume_file(db, user_id, resume_id)
    return FileResponse(
        path,
        media_type=resume.file_type,
        filename=resume.original_file_name or resume.file_name,
    )


@router.delete("/user/{user_id}/{resume_id}", status_code=204)
def delete_resume(user_id: int, resume_id: int, db: Session = Depends(get_db)):
    resume_service.delete_resume(db, user_id, resume_id)
    return Response(status_code=204)
