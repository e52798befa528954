"""
Internship Schemas - Pydantic models for internship postings and applications
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime

from app.models.internship import InternshipType, InternshipCategory, ApplicationStatus


# ============================================
# Internship Schemas
# ============================================

class InternshipCreate(BaseModel):
    """Create a new internship posting"""
    title: str = Field(..., min_length=3, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    duration: str = Field(..., min_length=1, max_length=100)
    stipend: str = Field(..., min_length=1, max_length=100)
    deadline: date
    skills: List[str] = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    logo: Optional[str] = None
    internship_type: InternshipType
    category: InternshipCategory

    @field_validator('skills')
    @classmethod
    def strip_skills(cls, v: List[str]) -> List[str]:
        skills = [s.strip() for s in v if s and s.strip()]
        if not skills:
            raise ValueError("At least one skill is required")
        return skills


class InternshipUpdate(BaseModel):
    """Update internship (all fields optional)"""
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    duration: Optional[str] = None
    stipend: Optional[str] = None
    deadline: Optional[date] = None
    skills: Optional[List[str]] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    internship_type: Optional[InternshipType] = None
    category: Optional[InternshipCategory] = None


class InternshipResponse(BaseModel):
    id: str
    title: str
    company: str
    location: str
    duration: str
    stipend: str
    deadline: date
    skills: List[str]
    description: str
    logo: Optional[str] = None
    internship_type: InternshipType
    category: InternshipCategory
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True


class InternshipListResponse(BaseModel):
    internships: List[InternshipResponse]
    total: int
    page: int
    limit: int


# ============================================
# Application Schemas
# ============================================

class ApplicationCreate(BaseModel):
    """Apply for an internship"""
    phone: str = Field(..., min_length=10, max_length=20)
    semester: str = Field(..., min_length=1, max_length=20)
    degree_program: str = Field(..., min_length=1, max_length=255)
    resume_path: Optional[str] = None
    cover_letter: Optional[str] = None


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    feedback: Optional[str] = None


class ApplicationResponse(BaseModel):
    id: str
    internship_id: str
    student_id: str
    status: ApplicationStatus
    phone: str
    semester: str
    degree_program: str
    resume_path: str
    cover_letter: Optional[str] = None
    feedback: Optional[str] = None
    applied_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
