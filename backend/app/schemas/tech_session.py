"""
Tech Session Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.tech_session import SessionCategory, SessionStatus


class TechSessionCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=1)
    date: datetime
    start_time: str = Field(..., pattern=r'^\d{2}:\d{2}$')
    end_time: str = Field(..., pattern=r'^\d{2}:\d{2}$')
    location: str = Field(..., min_length=1, max_length=255)
    virtual_meeting_link: Optional[str] = None
    capacity: int = Field(default=30, ge=1, le=1000)
    category: SessionCategory = SessionCategory.OTHER


class TechSessionUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    start_time: Optional[str] = Field(None, pattern=r'^\d{2}:\d{2}$')
    end_time: Optional[str] = Field(None, pattern=r'^\d{2}:\d{2}$')
    location: Optional[str] = None
    virtual_meeting_link: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1, le=1000)
    category: Optional[SessionCategory] = None
    status: Optional[SessionStatus] = None


class TechSessionResponse(BaseModel):
    id: str
    title: str
    description: str
    date: datetime
    start_time: str
    end_time: str
    location: str
    virtual_meeting_link: Optional[str] = None
    capacity: int
    category: SessionCategory
    status: SessionStatus
    faculty_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class RegistrationResponse(BaseModel):
    id: str
    session_id: str
    student_id: str
    registered_at: datetime
    attended: bool = False

    class Config:
        from_attributes = True
