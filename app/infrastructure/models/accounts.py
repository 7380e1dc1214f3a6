"""SQLAlchemy models for the three account tables."""

from sqlalchemy import Boolean, Column, DateTime, String

from app.infrastructure.database import Base
from app.utils import new_identifier, now_in_app_naive_datetime


class StudentModel(Base):
    """Database representation of a student account."""

    __tablename__ = "student"

    id = Column(String(32), primary_key=True, default=new_identifier)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    profile_pic_url = Column(String(500), nullable=True)
    university = Column(String(120), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class CompanyModel(Base):
    """Database representation of a company account."""

    __tablename__ = "company"

    id = Column(String(32), primary_key=True, default=new_identifier)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    company_name = Column(String(120), nullable=False)
    logo_url = Column(String(500), nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class AdminModel(Base):
    """Database representation of a platform administrator."""

    __tablename__ = "admin"

    id = Column(String(32), primary_key=True, default=new_identifier)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["AdminModel", "CompanyModel", "StudentModel"]
