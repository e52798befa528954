"""
Learning Resource API
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.models.user import User
from app.models.resource import ResourceType
from app.modules.auth.dependencies import get_current_user
from app.schemas.resource import ResourceCreate, ResourceResponse
from app.services.resource_service import get_resource_service

router = APIRouter(prefix="/resources", tags=["Resources"])


@router.get("", response_model=List[ResourceResponse])
async def list_resources(
    resource_type: Optional[ResourceType] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """All resources, newest first"""
    service = get_resource_service(db)
    return await service.list_resources(resource_type=resource_type)


@router.post("", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    data: ResourceCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_resource_service(db)
    return await service.create_resource(
        current_user,
        title=data.title,
        description=data.description,
        resource_type=data.resource_type,
        url=data.url
    )


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_resource_service(db)
    await service.delete_resource(current_user, resource_id)
