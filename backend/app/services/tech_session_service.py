"""
Tech Session Service Layer
Faculty-hosted technical sessions and student registrations
"""

from typing import List, Optional, Dict, Any
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AlreadyRegisteredError, AuthorizationError, ResourceNotFoundError,
    SessionFullError, TechSessionNotFoundError, ValidationError
)
from app.core.logging_config import logger
from app.models.user import User, UserRole
from app.models.tech_session import TechSession, SessionRegistration, SessionCategory, SessionStatus
from app.modules.auth.permissions import SESSION_HOSTS, require_role


DEFAULT_CAPACITY = 30

SESSION_FIELDS = (
    "title", "description", "date", "start_time", "end_time", "location",
    "virtual_meeting_link", "capacity", "category", "status",
)


class TechSessionService:
    """Service for tech sessions"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_session(self, session_id: str) -> TechSession:
        result = await self.db.execute(
            select(TechSession).where(TechSession.id == session_id)
        )
        session = result.scalar_one_or_none()
        if not session:
            raise TechSessionNotFoundError(session_id)
        return session

    async def create_session(self, actor: User, data: Dict[str, Any]) -> TechSession:
        require_role(actor, SESSION_HOSTS, "create tech sessions")

        fields = {key: data[key] for key in SESSION_FIELDS if data.get(key) is not None}
        fields.setdefault("capacity", DEFAULT_CAPACITY)
        if fields["capacity"] < 1:
            raise ValidationError("Capacity must be at least 1", field="capacity")

        session = TechSession(faculty_id=actor.id, **fields)
        self.db.add(session)
        await self.db.commit()
        await self.db.refresh(session)

        logger.info(
            f"Tech session {session.id} '{session.title}' created by {actor.id}",
            extra={"event_type": "tech_session_created", "session_id": str(session.id)}
        )
        return session

    async def list_sessions(
        self,
        status: Optional[SessionStatus] = None,
        category: Optional[SessionCategory] = None,
        faculty_id: Optional[str] = None
    ) -> List[TechSession]:
        """Sessions ordered by date, soonest first"""
        query = select(TechSession)
        if status:
            query = query.where(TechSession.status == status)
        if category:
            query = query.where(TechSession.category == category)
        if faculty_id:
            query = query.where(TechSession.faculty_id == faculty_id)

        result = await self.db.execute(query.order_by(TechSession.date, TechSession.id))
        return list(result.scalars().all())

    def _check_host(self, actor: User, session: TechSession) -> None:
        if actor.role == UserRole.ADMIN:
            return
        if actor.role == UserRole.FACULTY and str(session.faculty_id) == str(actor.id):
            return
        raise AuthorizationError("Only the hosting faculty or an admin can manage this session")

    async def update_session(self, actor: User, session_id: str, data: Dict[str, Any]) -> TechSession:
        session = await self.get_session(session_id)
        self._check_host(actor, session)

        for key in SESSION_FIELDS:
            if data.get(key) is not None:
                setattr(session, key, data[key])

        await self.db.commit()
        await self.db.refresh(session)
        return session

    async def delete_session(self, actor: User, session_id: str) -> None:
        session = await self.get_session(session_id)
        self._check_host(actor, session)

        await self.db.delete(session)
        await self.db.commit()

    # =====================================================
    # REGISTRATION
    # =====================================================

    async def count_registrations(self, session_id: str) -> int:
        result = await self.db.execute(
            select(func.count(SessionRegistration.id)).where(SessionRegistration.session_id == session_id)
        )
        return result.scalar() or 0

    async def _get_registration(self, session_id: str, student_id: str) -> Optional[SessionRegistration]:
        result = await self.db.execute(
            select(SessionRegistration).where(
                SessionRegistration.session_id == session_id,
                SessionRegistration.student_id == student_id
            )
        )
        return result.scalar_one_or_none()

    async def register(self, student: User, session_id: str) -> SessionRegistration:
        """Register a student for an upcoming session with free seats"""
        require_role(student, {UserRole.STUDENT}, "register for tech sessions")
        session = await self.get_session(session_id)

        if session.status != SessionStatus.UPCOMING:
            raise ValidationError("Cannot register for a session that is not upcoming", field="status")

        if await self._get_registration(session.id, student.id):
            raise AlreadyRegisteredError(str(session.id))

        if await self.count_registrations(session.id) >= session.capacity:
            raise SessionFullError(str(session.id), session.capacity)

        registration = SessionRegistration(session_id=session.id, student_id=student.id)
        self.db.add(registration)
        await self.db.commit()
        await self.db.refresh(registration)

        logger.info(
            f"Student {student.id} registered for tech session {session.id}",
            extra={"event_type": "session_registration", "session_id": str(session.id)}
        )
        return registration

    async def cancel_registration(self, student: User, session_id: str) -> None:
        require_role(student, {UserRole.STUDENT}, "cancel tech session registrations")
        session = await self.get_session(session_id)

        registration = await self._get_registration(session.id, student.id)
        if not registration:
            raise ResourceNotFoundError("SessionRegistration", str(session.id))

        await self.db.delete(registration)
        await self.db.commit()

    async def list_registrations(self, actor: User, session_id: str) -> List[SessionRegistration]:
        session = await self.get_session(session_id)
        self._check_host(actor, session)

        result = await self.db.execute(
            select(SessionRegistration)
            .where(SessionRegistration.session_id == session.id)
            .order_by(SessionRegistration.registered_at, SessionRegistration.id)
        )
        return list(result.scalars().all())


def get_tech_session_service(db: AsyncSession) -> TechSessionService:
    """Factory function to create tech session service"""
    return TechSessionService(db)
