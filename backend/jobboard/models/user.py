from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(190), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)  # bcrypt, never serialized
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False, default="")
    phone_country_code = Column(String(5), nullable=True)
    phone_number = Column(String(15), nullable=True)
    user_type = Column(String(20), nullable=False, default="candidate")  # candidate / employer / admin
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Deleting a user removes their resumes at ORM level; files are removed by the service.
    resumes = relationship("Resume", back_populates="user", cascade="all, delete-orphan")
