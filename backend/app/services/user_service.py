"""
User Service Layer
Profile lookup, profile edits and completion tracking
"""

from typing import Any, Dict, List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, UserNotFoundError
from app.core.logging_config import logger
from app.models.user import User, UserRole
from app.modules.auth.permissions import PROFILE_VIEWERS


COMMON_PROFILE_FIELDS = ("full_name", "email", "phone", "bio")

# Extra fields each role may set on its own profile
ROLE_PROFILE_FIELDS: Dict[UserRole, tuple] = {
    UserRole.STUDENT: ("university", "department", "year", "enrollment_number"),
    UserRole.FACULTY: ("department", "position", "expertise"),
    UserRole.COMPANY: ("company_name", "industry"),
    UserRole.ADMIN: (),
}

# Fields that must be filled before a profile counts as complete
REQUIRED_PROFILE_FIELDS: Dict[UserRole, tuple] = {
    UserRole.STUDENT: ("full_name", "email", "phone", "university", "department", "year", "enrollment_number"),
    UserRole.FACULTY: ("full_name", "email", "phone", "department", "position", "expertise"),
    UserRole.COMPANY: ("full_name", "email", "phone", "company_name"),
    UserRole.ADMIN: ("full_name", "email", "phone"),
}


def missing_profile_fields(user: User) -> List[str]:
    return [field for field in REQUIRED_PROFILE_FIELDS.get(user.role, ()) if not getattr(user, field)]


class UserService:
    """Service for user profiles"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, user_id: str) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def get_user(self, actor: User, user_id: str) -> User:
        """Users see themselves. Faculty and admins see anyone."""
        if str(actor.id) != str(user_id) and actor.role not in PROFILE_VIEWERS:
            raise AuthorizationError("You can only view your own profile")
        return await self._load(user_id)

    async def update_user(self, actor: User, user_id: str, data: Dict[str, Any]) -> User:
        """
        Apply profile edits. Only the user or an admin may edit.

        Blank values leave the stored value alone, and fields belonging to
        another role are ignored. The completion flag is recomputed.
        """
        if str(actor.id) != str(user_id) and actor.role != UserRole.ADMIN:
            raise AuthorizationError("You can only update your own profile")
        user = await self._load(user_id)

        allowed = COMMON_PROFILE_FIELDS + ROLE_PROFILE_FIELDS.get(user.role, ())
        for key in allowed:
            value = data.get(key)
            if isinstance(value, str):
                value = value.strip()
            if value:
                setattr(user, key, value)

        user.profile_completed = not missing_profile_fields(user)

        await self.db.commit()
        await self.db.refresh(user)

        logger.info(
            f"Profile updated for user {user.id} by {actor.id}",
            extra={"event_type": "profile_updated", "complete": user.profile_completed}
        )
        return user

    async def get_profile_completion(self, user: User) -> Dict[str, Any]:
        """Check the user's own profile and sync the stored flag"""
        user = await self._load(user.id)
        missing = missing_profile_fields(user)
        is_complete = not missing

        if bool(user.profile_completed) != is_complete:
            user.profile_completed = is_complete
            await self.db.commit()

        return {"is_complete": is_complete, "missing_fields": missing}


def get_user_service(db: AsyncSession) -> UserService:
    """Factory function to create user service"""
    return UserService(db)
