"""
Unit Tests for the Tech Session Service
"""
import pytest
from datetime import datetime, timedelta

from app.core.exceptions import (
    AlreadyRegisteredError, AuthorizationError, ResourceNotFoundError,
    SessionFullError, ValidationError
)
from app.models.tech_session import SessionStatus, SessionCategory
from app.services.tech_session_service import TechSessionService


class TestTechSessions:

    @pytest.mark.asyncio
    async def test_create_defaults(self, db_session, faculty):
        session = await TechSessionService(db_session).create_session(faculty, {
            "title": "Kubernetes 101",
            "description": "Hands-on cluster basics",
            "date": datetime.utcnow() + timedelta(days=3),
            "start_time": "14:00",
            "end_time": "16:00",
            "location": "Seminar Hall",
            "category": SessionCategory.CLOUD,
        })

        assert session.capacity == 30
        assert session.status == SessionStatus.UPCOMING
        assert session.faculty_id == faculty.id

    @pytest.mark.asyncio
    async def test_student_cannot_create(self, db_session, student):
        with pytest.raises(AuthorizationError):
            await TechSessionService(db_session).create_session(student, {"title": "x"})

    @pytest.mark.asyncio
    async def test_register_and_cancel(self, db_session, faculty, student, make_tech_session):
        session = await make_tech_session(faculty)
        service = TechSessionService(db_session)

        registration = await service.register(student, session.id)
        assert registration.student_id == student.id
        assert await service.count_registrations(session.id) == 1

        await service.cancel_registration(student, session.id)
        assert await service.count_registrations(session.id) == 0

    @pytest.mark.asyncio
    async def test_double_registration(self, db_session, faculty, student, make_tech_session):
        session = await make_tech_session(faculty)
        service = TechSessionService(db_session)
        await service.register(student, session.id)

        with pytest.raises(AlreadyRegisteredError):
            await service.register(student, session.id)

    @pytest.mark.asyncio
    async def test_capacity(self, db_session, faculty, student, other_student, make_tech_session):
        session = await make_tech_session(faculty, capacity=1)
        service = TechSessionService(db_session)
        await service.register(student, session.id)

        with pytest.raises(SessionFullError):
            await service.register(other_student, session.id)

    @pytest.mark.asyncio
    async def test_only_upcoming_sessions(self, db_session, faculty, student, make_tech_session):
        session = await make_tech_session(faculty, status=SessionStatus.COMPLETED)

        with pytest.raises(ValidationError):
            await TechSessionService(db_session).register(student, session.id)

    @pytest.mark.asyncio
    async def test_faculty_cannot_register(self, db_session, faculty, make_tech_session):
        session = await make_tech_session(faculty)

        with pytest.raises(AuthorizationError):
            await TechSessionService(db_session).register(faculty, session.id)

    @pytest.mark.asyncio
    async def test_cancel_without_registration(self, db_session, faculty, student, make_tech_session):
        session = await make_tech_session(faculty)

        with pytest.raises(ResourceNotFoundError):
            await TechSessionService(db_session).cancel_registration(student, session.id)

    @pytest.mark.asyncio
    async def test_list_filters(self, db_session, faculty, make_tech_session):
        upcoming = await make_tech_session(faculty, category=SessionCategory.AI)
        await make_tech_session(faculty, status=SessionStatus.CANCELLED, category=SessionCategory.AI)
        service = TechSessionService(db_session)

        sessions = await service.list_sessions(status=SessionStatus.UPCOMING, category=SessionCategory.AI)

        assert [s.id for s in sessions] == [upcoming.id]

    @pytest.mark.asyncio
    async def test_registrations_visible_to_host(self, db_session, faculty, other_faculty, student, make_tech_session):
        session = await make_tech_session(faculty)
        service = TechSessionService(db_session)
        await service.register(student, session.id)

        assert len(await service.list_registrations(faculty, session.id)) == 1
        with pytest.raises(AuthorizationError):
            await service.list_registrations(other_faculty, session.id)
