from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Text
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class UserRole(str, enum.Enum):
    """User roles"""
    ADMIN = "admin"
    FACULTY = "faculty"
    STUDENT = "student"
    COMPANY = "company"


class User(Base):
    """User model"""
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    username = Column(String(100), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)

    role = Column(SQLEnum(UserRole), nullable=False, index=True)
    is_active = Column(Boolean, default=True)

    # Profile fields
    phone = Column(String(20), nullable=True)
    university = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)
    year = Column(String(20), nullable=True)
    enrollment_number = Column(String(50), nullable=True)
    bio = Column(Text, nullable=True)

    # Employer (faculty working with a company, company accounts)
    company_name = Column(String(255), nullable=True, index=True)
    industry = Column(String(255), nullable=True)
    position = Column(String(255), nullable=True)
    expertise = Column(String(255), nullable=True)
    profile_completed = Column(Boolean, default=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.username} ({self.role.value if self.role else '-'})>"
