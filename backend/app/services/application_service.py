"""
Application Service Layer
Student applications to internships and their review
"""

from typing import List, Optional
from datetime import date
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ApplicationNotFoundError, AuthorizationError, DeadlinePassedError,
    DuplicateApplicationError, ValidationError
)
from app.core.logging_config import logger
from app.models.user import User, UserRole
from app.models.internship import Internship, InternshipApplication, ApplicationStatus
from app.modules.auth.permissions import APPLICATION_TRANSITIONS, authorize_transition, require_role
from app.services.internship_service import InternshipService


MIN_PHONE_LENGTH = 10


class ApplicationService:
    """Service for internship applications"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.internships = InternshipService(db)

    async def _load(self, application_id: str) -> InternshipApplication:
        result = await self.db.execute(
            select(InternshipApplication).where(InternshipApplication.id == application_id)
        )
        application = result.scalar_one_or_none()
        if not application:
            raise ApplicationNotFoundError(application_id)
        return application

    async def apply(
        self,
        student: User,
        internship_id: str,
        phone: str,
        semester: str,
        degree_program: str,
        resume_path: Optional[str],
        cover_letter: Optional[str] = None,
        today: Optional[date] = None
    ) -> InternshipApplication:
        """Submit a pending application. The deadline day itself is still open."""
        require_role(student, {UserRole.STUDENT}, "apply for internships")
        internship = await self.internships.get_internship(internship_id)

        today = today or date.today()
        if today > internship.deadline:
            raise DeadlinePassedError(str(internship.id), internship.deadline)

        if not resume_path:
            raise ValidationError("Resume file is required", field="resume")
        if not phone or len(phone.strip()) < MIN_PHONE_LENGTH:
            raise ValidationError(
                f"Phone number must be at least {MIN_PHONE_LENGTH} characters", field="phone"
            )

        result = await self.db.execute(
            select(InternshipApplication).where(
                InternshipApplication.internship_id == internship.id,
                InternshipApplication.student_id == student.id,
                InternshipApplication.status == ApplicationStatus.PENDING
            )
        )
        pending = result.scalars().first()
        if pending:
            raise DuplicateApplicationError(str(internship.id), str(pending.id))

        application = InternshipApplication(
            internship_id=internship.id,
            student_id=student.id,
            status=ApplicationStatus.PENDING,
            phone=phone.strip(),
            semester=semester,
            degree_program=degree_program,
            resume_path=resume_path,
            cover_letter=cover_letter
        )
        self.db.add(application)
        await self.db.commit()
        await self.db.refresh(application)

        logger.info(
            f"Student {student.id} applied to internship {internship.id}",
            extra={"event_type": "application_submitted", "application_id": str(application.id)}
        )
        return application

    async def update_application_status(
        self,
        actor: User,
        application_id: str,
        status: ApplicationStatus,
        feedback: Optional[str] = None
    ) -> InternshipApplication:
        """
        Move an application to a new status.

        Students withdraw their own pending applications, the faculty who
        posted the internship accept or reject pending ones, admins may set
        anything. Non-empty feedback replaces any earlier feedback.
        """
        application = await self._load(application_id)
        try:
            target = ApplicationStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown application status '{status}'", field="status")

        creator_id = None
        if actor.role == UserRole.FACULTY:
            internship = await self.internships.get_internship(application.internship_id)
            creator_id = internship.created_by

        try:
            authorize_transition(
                APPLICATION_TRANSITIONS, "application", actor,
                application.status, target,
                owner_id=application.student_id, creator_id=creator_id
            )
        except AuthorizationError:
            logger.warning(
                f"Application status change refused for {actor.id} on {application.id}",
                extra={"event_type": "transition_refused", "application_id": str(application.id), "target": target.value}
            )
            raise

        previous = application.status
        application.status = target
        if feedback:
            application.feedback = feedback

        await self.db.commit()
        await self.db.refresh(application)

        logger.log_transition(
            "application", str(application.id),
            previous.value if previous else None, target.value, str(actor.id)
        )
        return application

    async def list_student_applications(self, student: User) -> List[InternshipApplication]:
        result = await self.db.execute(
            select(InternshipApplication)
            .where(InternshipApplication.student_id == student.id)
            .order_by(InternshipApplication.applied_at.desc(), InternshipApplication.id)
        )
        return list(result.scalars().all())

    async def list_internship_applications(self, actor: User, internship_id: str) -> List[InternshipApplication]:
        """Applications for one internship. Creator faculty and admins only."""
        internship = await self.internships.get_internship(internship_id)
        self._check_reviewer(actor, internship)

        result = await self.db.execute(
            select(InternshipApplication)
            .where(InternshipApplication.internship_id == internship.id)
            .order_by(InternshipApplication.applied_at, InternshipApplication.id)
        )
        return list(result.scalars().all())

    async def get_application(self, actor: User, application_id: str) -> InternshipApplication:
        application = await self._load(application_id)

        if actor.role == UserRole.STUDENT:
            if str(application.student_id) != str(actor.id):
                raise AuthorizationError("You can only view your own applications")
        else:
            internship = await self.internships.get_internship(application.internship_id)
            self._check_reviewer(actor, internship)

        return application

    async def delete_application(self, actor: User, application_id: str) -> None:
        """Delete an application. Allowed for its student, the internship's creator and admins."""
        application = await self._load(application_id)

        if actor.role == UserRole.STUDENT:
            if str(application.student_id) != str(actor.id):
                raise AuthorizationError("You can only delete your own applications")
        else:
            internship = await self.internships.get_internship(application.internship_id)
            self._check_reviewer(actor, internship)

        await self.db.delete(application)
        await self.db.commit()

        logger.info(
            f"Application {application_id} deleted by {actor.id}",
            extra={"event_type": "application_deleted", "application_id": str(application_id)}
        )

    def _check_reviewer(self, actor: User, internship: Internship) -> None:
        if actor.role == UserRole.ADMIN:
            return
        if actor.role == UserRole.FACULTY and str(internship.created_by) == str(actor.id):
            return
        raise AuthorizationError("You do not have permission to manage applications for this internship")


def get_application_service(db: AsyncSession) -> ApplicationService:
    """Factory function to create application service"""
    return ApplicationService(db)
