"""
Faculty Allocation Model
Mentorship link between one faculty member and one student.

A student holds at most one allocation. This is guarded by the allocation
service, not by a unique constraint.
"""

from sqlalchemy import Column, DateTime, Enum as SQLEnum, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class AllocationStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class FacultyAllocation(Base):
    """Faculty <-> student mentorship assignment"""
    __tablename__ = "faculty_allocations"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    faculty_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    student_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(SQLEnum(AllocationStatus), default=AllocationStatus.ACTIVE, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    # Relationships
    faculty = relationship("User", foreign_keys=[faculty_id])
    student = relationship("User", foreign_keys=[student_id])

    def __repr__(self):
        return f"<FacultyAllocation faculty={self.faculty_id} student={self.student_id}>"
