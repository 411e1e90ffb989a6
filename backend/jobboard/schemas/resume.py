from datetime import datetime

from .base import CamelModel


class ResumeOut(CamelModel):
    id: int
    file_name: str
    file_type: str
    file_size: int
    original_file_name: str | None = None
    is_primary: bool = False
    description: str | None = None
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
