"""
Internship Models
- Internship postings created by faculty/admin
- Student applications and their review status
"""

from sqlalchemy import Column, String, DateTime, Date, Enum as SQLEnum, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class InternshipType(str, enum.Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"


class InternshipCategory(str, enum.Enum):
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    DATA_SCIENCE = "Data Science"
    MACHINE_LEARNING = "Machine Learning"
    CLOUD_COMPUTING = "Cloud Computing"
    CYBERSECURITY = "Cybersecurity"
    UI_UX_DESIGN = "UI/UX Design"
    DEVOPS = "DevOps"
    BLOCKCHAIN = "Blockchain"
    OTHER = "Other"


class ApplicationStatus(str, enum.Enum):
    """Application states. Everything except PENDING is terminal."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class Internship(Base):
    """Internship posting"""
    __tablename__ = "internships"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    duration = Column(String(100), nullable=False)
    stipend = Column(String(100), nullable=False)
    deadline = Column(Date, nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    description = Column(Text, nullable=False)
    logo = Column(Text, nullable=True)
    internship_type = Column(SQLEnum(InternshipType), nullable=False)
    category = Column(SQLEnum(InternshipCategory), nullable=False)

    created_by = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    applications = relationship("InternshipApplication", back_populates="internship", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Internship {self.title} @ {self.company}>"


class InternshipApplication(Base):
    """Student application to an internship"""
    __tablename__ = "internship_applications"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    internship_id = Column(GUID, ForeignKey("internships.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(SQLEnum(ApplicationStatus), default=ApplicationStatus.PENDING, nullable=False)

    phone = Column(String(20), nullable=False)
    semester = Column(String(20), nullable=False)
    degree_program = Column(String(255), nullable=False)
    resume_path = Column(Text, nullable=False)
    cover_letter = Column(Text, nullable=True)
    feedback = Column(Text, nullable=True)

    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    internship = relationship("Internship", back_populates="applications")

    def __repr__(self):
        return f"<InternshipApplication {self.id} {self.status.value if self.status else '-'}>"
