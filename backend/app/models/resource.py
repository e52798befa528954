from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class ResourceType(str, enum.Enum):
    GUIDELINE = "guideline"
    LINK = "link"
    FILE = "file"


class LearningResource(Base):
    """Guideline, link or file shared with students"""
    __tablename__ = "learning_resources"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    url = Column(Text, nullable=True)  # link target or stored file key
    resource_type = Column(SQLEnum(ResourceType), nullable=False)

    created_by = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    creator = relationship("User", lazy="joined")

    @property
    def creator_name(self) -> str:
        return self.creator.full_name if self.creator else "Unknown"

    @property
    def creator_role(self) -> str:
        return self.creator.role.value if self.creator else "unknown"

    def __repr__(self):
        return f"<LearningResource {self.title} ({self.resource_type.value if self.resource_type else '-'})>"
