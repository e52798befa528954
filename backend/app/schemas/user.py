"""
User Schemas - Profile read/update and completion status
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.models.user import UserRole


class UserResponse(BaseModel):
    id: str
    username: str
    full_name: str
    email: Optional[str] = None
    role: UserRole
    is_active: bool = True
    phone: Optional[str] = None
    university: Optional[str] = None
    department: Optional[str] = None
    year: Optional[str] = None
    enrollment_number: Optional[str] = None
    bio: Optional[str] = None
    company_name: Optional[str] = None
    industry: Optional[str] = None
    position: Optional[str] = None
    expertise: Optional[str] = None
    profile_completed: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Profile fields. Empty values are ignored, role-specific ones only apply to that role."""
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    bio: Optional[str] = None
    university: Optional[str] = Field(None, max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    year: Optional[str] = Field(None, max_length=20)
    enrollment_number: Optional[str] = Field(None, max_length=50)
    position: Optional[str] = Field(None, max_length=255)
    expertise: Optional[str] = Field(None, max_length=255)
    company_name: Optional[str] = Field(None, max_length=255)
    industry: Optional[str] = Field(None, max_length=255)


class ProfileCompletion(BaseModel):
    is_complete: bool
    missing_fields: List[str]


class MentorResponse(BaseModel):
    mentor: Optional[UserResponse] = None
