"""
Learning Resource Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.resource import ResourceType


class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    url: Optional[str] = None
    resource_type: ResourceType


class ResourceResponse(BaseModel):
    id: str
    title: str
    description: str
    url: Optional[str] = None
    resource_type: ResourceType
    created_by: str
    creator_name: str = "Unknown"
    creator_role: str = "unknown"
    created_at: datetime

    class Config:
        from_attributes = True
