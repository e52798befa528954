from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class SessionCategory(str, enum.Enum):
    WEB = "web"
    AI = "ai"
    CLOUD = "cloud"
    MOBILE = "mobile"
    SECURITY = "security"
    OTHER = "other"


class SessionStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TechSession(Base):
    """Technical session hosted by a faculty member"""
    __tablename__ = "tech_sessions"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False)
    start_time = Column(String(10), nullable=False)  # HH:MM
    end_time = Column(String(10), nullable=False)
    location = Column(String(255), nullable=False)
    virtual_meeting_link = Column(Text, nullable=True)
    capacity = Column(Integer, default=30, nullable=False)
    category = Column(SQLEnum(SessionCategory), default=SessionCategory.OTHER, nullable=False)
    status = Column(SQLEnum(SessionStatus), default=SessionStatus.UPCOMING, nullable=False)

    faculty_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    registrations = relationship("SessionRegistration", back_populates="session", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<TechSession {self.title}>"


class SessionRegistration(Base):
    """Student registration for a tech session"""
    __tablename__ = "session_registrations"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    session_id = Column(GUID, ForeignKey("tech_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    registered_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    attended = Column(Boolean, default=False)
    feedback = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True)

    # Relationships
    session = relationship("TechSession", back_populates="registrations")

    def __repr__(self):
        return f"<SessionRegistration session={self.session_id} student={self.student_id}>"
