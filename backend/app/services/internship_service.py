"""
Internship Service Layer
Internship postings published by faculty and admins
"""

from typing import List, Optional, Dict, Any
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, InternshipNotFoundError, ValidationError
from app.core.logging_config import logger
from app.models.user import User, UserRole
from app.models.internship import Internship, InternshipType, InternshipCategory
from app.modules.auth.permissions import INTERNSHIP_PUBLISHERS, require_role


SORTABLE_FIELDS = {
    "deadline": Internship.deadline,
    "stipend": Internship.stipend,
    "created_at": Internship.created_at,
}

EDITABLE_FIELDS = (
    "title", "company", "location", "duration", "stipend", "deadline",
    "skills", "description", "logo", "internship_type", "category",
)


def _validate_skills(skills: Optional[List[str]]) -> List[str]:
    cleaned = [s.strip() for s in (skills or []) if s and s.strip()]
    if not cleaned:
        raise ValidationError("At least one skill is required", field="skills")
    return cleaned


class InternshipService:
    """Service for internship postings"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_internship(self, internship_id: str) -> Internship:
        result = await self.db.execute(
            select(Internship).where(Internship.id == internship_id)
        )
        internship = result.scalar_one_or_none()
        if not internship:
            raise InternshipNotFoundError(internship_id)
        return internship

    async def create_internship(self, actor: User, data: Dict[str, Any]) -> Internship:
        """Publish a new internship. The actor becomes its creator."""
        require_role(actor, INTERNSHIP_PUBLISHERS, "create internships")

        fields = {key: data[key] for key in EDITABLE_FIELDS if key in data}
        fields["skills"] = _validate_skills(fields.get("skills"))

        internship = Internship(created_by=actor.id, **fields)
        self.db.add(internship)
        await self.db.commit()
        await self.db.refresh(internship)

        logger.info(
            f"Internship {internship.id} '{internship.title}' created by {actor.id}",
            extra={"event_type": "internship_created", "internship_id": str(internship.id)}
        )
        return internship

    async def list_internships(
        self,
        internship_type: Optional[InternshipType] = None,
        category: Optional[InternshipCategory] = None,
        search: Optional[str] = None,
        created_by: Optional[str] = None,
        sort_by: str = "deadline",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 10
    ) -> Dict[str, Any]:
        """Filtered, sorted and paginated internship listing"""
        conditions = []
        if internship_type:
            conditions.append(Internship.internship_type == internship_type)
        if category:
            conditions.append(Internship.category == category)
        if created_by:
            conditions.append(Internship.created_by == created_by)
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(
                Internship.title.ilike(pattern),
                Internship.company.ilike(pattern),
                Internship.description.ilike(pattern)
            ))

        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'. Use one of: {', '.join(SORTABLE_FIELDS)}",
                field="sort_by"
            )
        column = SORTABLE_FIELDS[sort_by]
        ordering = column.asc() if sort_order == "asc" else column.desc()

        page = max(page, 1)
        limit = max(min(limit, 100), 1)

        count_result = await self.db.execute(
            select(func.count(Internship.id)).where(*conditions)
        )
        total = count_result.scalar() or 0

        result = await self.db.execute(
            select(Internship)
            .where(*conditions)
            .order_by(ordering, Internship.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )

        return {
            "internships": list(result.scalars().all()),
            "total": total,
            "page": page,
            "limit": limit
        }

    def _check_owner(self, actor: User, internship: Internship, action: str) -> None:
        if actor.role == UserRole.ADMIN:
            return
        if actor.role == UserRole.FACULTY and str(internship.created_by) == str(actor.id):
            return
        raise AuthorizationError(f"You do not have permission to {action} this internship")

    async def update_internship(self, actor: User, internship_id: str, data: Dict[str, Any]) -> Internship:
        internship = await self.get_internship(internship_id)
        self._check_owner(actor, internship, "update")

        if "skills" in data:
            data = {**data, "skills": _validate_skills(data["skills"])}

        for key in EDITABLE_FIELDS:
            if key in data and data[key] is not None:
                setattr(internship, key, data[key])

        await self.db.commit()
        await self.db.refresh(internship)
        return internship

    async def delete_internship(self, actor: User, internship_id: str) -> None:
        internship = await self.get_internship(internship_id)
        self._check_owner(actor, internship, "delete")

        await self.db.delete(internship)
        await self.db.commit()

        logger.info(
            f"Internship {internship_id} deleted by {actor.id}",
            extra={"event_type": "internship_deleted", "internship_id": str(internship_id)}
        )


def get_internship_service(db: AsyncSession) -> InternshipService:
    """Factory function to create internship service"""
    return InternshipService(db)
