"""
Resource Service Layer
Guidelines, links and file references shared by staff and companies
"""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, LearningResourceNotFoundError, ValidationError
from app.core.logging_config import logger
from app.models.user import User, UserRole
from app.models.resource import LearningResource, ResourceType
from app.modules.auth.permissions import RESOURCE_PUBLISHERS, require_role


class ResourceService:
    """Service for learning resources"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_resource(self, resource_id: str) -> LearningResource:
        result = await self.db.execute(
            select(LearningResource).where(LearningResource.id == resource_id)
        )
        resource = result.scalar_one_or_none()
        if not resource:
            raise LearningResourceNotFoundError(resource_id)
        return resource

    async def list_resources(self, resource_type: Optional[ResourceType] = None) -> List[LearningResource]:
        """Newest first, each with its creator loaded"""
        query = select(LearningResource)
        if resource_type:
            query = query.where(LearningResource.resource_type == resource_type)

        result = await self.db.execute(
            query.order_by(LearningResource.created_at.desc(), LearningResource.id)
        )
        return list(result.scalars().all())

    async def create_resource(
        self,
        actor: User,
        title: str,
        description: str,
        resource_type: ResourceType,
        url: Optional[str] = None
    ) -> LearningResource:
        require_role(actor, RESOURCE_PUBLISHERS, "publish resources")

        if not title or not title.strip():
            raise ValidationError("Title is required", field="title")
        if not description or not description.strip():
            raise ValidationError("Description is required", field="description")
        try:
            resource_type = ResourceType(resource_type)
        except ValueError:
            raise ValidationError(f"Invalid resource type '{resource_type}'", field="resource_type")

        resource = LearningResource(
            title=title.strip(),
            description=description.strip(),
            url=url or None,
            resource_type=resource_type,
            creator=actor
        )
        self.db.add(resource)
        await self.db.commit()
        await self.db.refresh(resource)

        logger.info(
            f"Resource {resource.id} '{resource.title}' published by {actor.id}",
            extra={"event_type": "resource_created", "resource_id": str(resource.id)}
        )
        return resource

    async def delete_resource(self, actor: User, resource_id: str) -> None:
        """Creators delete their own resources, admins delete any"""
        require_role(actor, RESOURCE_PUBLISHERS, "delete resources")
        resource = await self.get_resource(resource_id)

        if actor.role != UserRole.ADMIN and str(resource.created_by) != str(actor.id):
            raise AuthorizationError("You can only delete resources you created")

        await self.db.delete(resource)
        await self.db.commit()


def get_resource_service(db: AsyncSession) -> ResourceService:
    """Factory function to create resource service"""
    return ResourceService(db)
