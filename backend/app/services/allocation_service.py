"""
Allocation Service Layer
Matches students to faculty mentors under a fixed per-faculty capacity.

Auto-allocation tries three tiers in order and stops at the first faculty
member with room:

1. Same employer: faculty whose company_name matches the company on the
   student's latest approved offer letter.
2. Same cohort: faculty already mentoring other students whose approved
   offer letters name the same company.
3. Least loaded: every faculty member, lowest active count first.

"No faculty with room" is returned as None, not raised.
"""

from typing import List, Optional, Dict, Any
from datetime import datetime
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AllocationExistsError, AllocationNotFoundError, FacultyAtCapacityError,
    InvalidTransitionError, UserNotFoundError
)
from app.core.logging_config import logger
from app.models.user import User, UserRole
from app.models.document import Document, DocumentType, DocumentStatus
from app.models.allocation import FacultyAllocation, AllocationStatus


MAX_STUDENTS_PER_FACULTY = 10

TIER_SAME_EMPLOYER = "same_employer"
TIER_SAME_COHORT = "same_cohort"
TIER_LEAST_LOADED = "least_loaded"


class AllocationService:
    """Service for faculty <-> student mentorship allocation"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # =====================================================
    # CAPACITY & WORKLOAD
    # =====================================================

    async def get_faculty_student_count(self, faculty_id: str) -> int:
        """Number of active allocations held by a faculty member"""
        result = await self.db.execute(
            select(func.count(FacultyAllocation.id)).where(
                FacultyAllocation.faculty_id == faculty_id,
                FacultyAllocation.status == AllocationStatus.ACTIVE
            )
        )
        return result.scalar() or 0

    async def get_faculty_workloads(self) -> List[Dict[str, Any]]:
        """One entry per faculty user in natural order with its active student count"""
        active_counts = (
            select(
                FacultyAllocation.faculty_id.label("faculty_id"),
                func.count(FacultyAllocation.id).label("student_count")
            )
            .where(FacultyAllocation.status == AllocationStatus.ACTIVE)
            .group_by(FacultyAllocation.faculty_id)
            .subquery()
        )
        result = await self.db.execute(
            select(User, func.coalesce(active_counts.c.student_count, 0))
            .outerjoin(active_counts, active_counts.c.faculty_id == User.id)
            .where(User.role == UserRole.FACULTY)
            .order_by(User.created_at, User.id)
        )

        return [
            {
                "faculty_id": str(faculty.id),
                "name": faculty.full_name,
                "student_count": int(count)
            }
            for faculty, count in result.all()
        ]

    async def get_unallocated_students(self) -> List[Dict[str, Any]]:
        """Students with no allocation row at all (active or completed)"""
        allocated = select(FacultyAllocation.student_id)
        result = await self.db.execute(
            select(User)
            .where(User.role == UserRole.STUDENT, User.id.not_in(allocated))
            .order_by(User.created_at, User.id)
        )

        return [
            {
                "id": str(student.id),
                "name": student.full_name,
                "email": student.email
            }
            for student in result.scalars().all()
        ]

    # =====================================================
    # AUTO-ALLOCATION
    # =====================================================

    async def allocate_student(self, student_id: str) -> Optional[FacultyAllocation]:
        """
        Allocate a mentor to a student.

        Returns the existing allocation if the student already has one, the
        new allocation on success, or None when no faculty has capacity.
        """
        existing = await self._get_student_allocation(student_id)
        if existing:
            return existing

        offer_company = await self._get_offer_letter_company(student_id)

        tiers = []
        if offer_company:
            tiers.append((TIER_SAME_EMPLOYER, lambda: self._same_employer_candidates(offer_company)))
            tiers.append((TIER_SAME_COHORT, lambda: self._same_cohort_candidates(student_id, offer_company)))
        tiers.append((TIER_LEAST_LOADED, self._least_loaded_candidates))

        for tier, candidates in tiers:
            for faculty_id in await candidates():
                allocation = await self._claim(faculty_id, student_id)
                if allocation:
                    logger.log_allocation(student_id, faculty_id, tier, company_name=offer_company)
                    return allocation

        logger.log_allocation(student_id, None, None, company_name=offer_company)
        return None

    async def bulk_allocate_students(self) -> Dict[str, int]:
        """Sequentially auto-allocate every unallocated student"""
        success = 0
        failed = 0

        for student in await self.get_unallocated_students():
            allocation = await self.allocate_student(student["id"])
            if allocation:
                success += 1
            else:
                failed += 1

        logger.info(
            f"Bulk allocation finished: {success} allocated, {failed} without capacity",
            extra={"event_type": "bulk_allocation", "allocated": success, "failed": failed}
        )
        return {"success": success, "failed": failed}

    async def _get_student_allocation(self, student_id: str) -> Optional[FacultyAllocation]:
        result = await self.db.execute(
            select(FacultyAllocation)
            .where(FacultyAllocation.student_id == student_id)
            .order_by(FacultyAllocation.created_at, FacultyAllocation.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def _get_offer_letter_company(self, student_id: str) -> Optional[str]:
        """Company on the student's most recent approved offer letter"""
        result = await self.db.execute(
            select(Document.company_name)
            .where(
                Document.user_id == student_id,
                Document.doc_type == DocumentType.OFFER_LETTER,
                Document.status == DocumentStatus.APPROVED
            )
            .order_by(Document.created_at.desc(), Document.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def _same_employer_candidates(self, company_name: str) -> List[str]:
        result = await self.db.execute(
            select(User.id)
            .where(User.role == UserRole.FACULTY, User.company_name == company_name)
            .order_by(User.created_at, User.id)
        )
        return [str(faculty_id) for faculty_id in result.scalars().all()]

    async def _same_cohort_candidates(self, student_id: str, company_name: str) -> List[str]:
        peers = (
            select(Document.user_id)
            .where(
                Document.doc_type == DocumentType.OFFER_LETTER,
                Document.status == DocumentStatus.APPROVED,
                Document.company_name == company_name,
                Document.user_id != student_id
            )
        )
        result = await self.db.execute(
            select(FacultyAllocation.faculty_id)
            .where(FacultyAllocation.student_id.in_(peers))
            .order_by(FacultyAllocation.created_at, FacultyAllocation.id)
        )

        # Distinct faculty in order of first appearance
        candidates: List[str] = []
        for faculty_id in result.scalars().all():
            faculty_id = str(faculty_id)
            if faculty_id not in candidates:
                candidates.append(faculty_id)
        return candidates

    async def _least_loaded_candidates(self) -> List[str]:
        workloads = await self.get_faculty_workloads()
        # sorted() is stable, so ties keep natural order
        workloads = sorted(workloads, key=lambda w: w["student_count"])
        return [
            w["faculty_id"] for w in workloads
            if w["student_count"] < MAX_STUDENTS_PER_FACULTY
        ]

    async def _lock_faculty(self, faculty_id: str) -> Optional[User]:
        """Row-lock the faculty user so concurrent claims serialize on it (PostgreSQL; a no-op on SQLite)"""
        result = await self.db.execute(
            select(User).where(User.id == faculty_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def _claim(self, faculty_id: str, student_id: str) -> Optional[FacultyAllocation]:
        """Insert an active allocation if the faculty still has room after locking"""
        if not await self._lock_faculty(faculty_id):
            return None

        if await self.get_faculty_student_count(faculty_id) >= MAX_STUDENTS_PER_FACULTY:
            return None

        allocation = FacultyAllocation(
            faculty_id=faculty_id,
            student_id=student_id,
            status=AllocationStatus.ACTIVE
        )
        self.db.add(allocation)
        await self.db.commit()
        await self.db.refresh(allocation)
        return allocation

    # =====================================================
    # MANUAL ALLOCATION & QUERIES
    # =====================================================

    async def create_allocation(self, faculty_id: str, student_id: str) -> FacultyAllocation:
        """Manually assign a student to a faculty member"""
        faculty = await self._get_user_with_role(faculty_id, UserRole.FACULTY)
        student = await self._get_user_with_role(student_id, UserRole.STUDENT)

        existing = await self._get_student_allocation(student.id)
        if existing:
            raise AllocationExistsError(str(student.id), str(existing.id))

        allocation = await self._claim(str(faculty.id), str(student.id))
        if not allocation:
            raise FacultyAtCapacityError(str(faculty.id), MAX_STUDENTS_PER_FACULTY)

        logger.log_allocation(str(student.id), str(faculty.id), "manual")
        return allocation

    async def get_allocations(self, user: User) -> List[FacultyAllocation]:
        """Allocations visible to a user"""
        query = select(FacultyAllocation).order_by(FacultyAllocation.created_at, FacultyAllocation.id)

        if user.role == UserRole.FACULTY:
            query = query.where(FacultyAllocation.faculty_id == user.id)
        elif user.role == UserRole.STUDENT:
            query = query.where(FacultyAllocation.student_id == user.id)
        elif user.role != UserRole.ADMIN:
            return []

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_faculty_for_student(self, student_id: str) -> Optional[User]:
        """Mentor of a student's active allocation"""
        result = await self.db.execute(
            select(User)
            .join(FacultyAllocation, FacultyAllocation.faculty_id == User.id)
            .where(
                FacultyAllocation.student_id == student_id,
                FacultyAllocation.status == AllocationStatus.ACTIVE
            )
            .order_by(FacultyAllocation.created_at, FacultyAllocation.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def complete_allocation(self, allocation_id: str) -> FacultyAllocation:
        """Mark an allocation completed, freeing the faculty's capacity"""
        result = await self.db.execute(
            select(FacultyAllocation).where(FacultyAllocation.id == allocation_id)
        )
        allocation = result.scalar_one_or_none()
        if not allocation:
            raise AllocationNotFoundError(allocation_id)

        if allocation.status != AllocationStatus.ACTIVE:
            raise InvalidTransitionError("allocation", allocation.status, AllocationStatus.COMPLETED)

        allocation.status = AllocationStatus.COMPLETED
        allocation.completed_at = datetime.utcnow()
        await self.db.commit()
        await self.db.refresh(allocation)

        logger.log_transition(
            "allocation", str(allocation.id),
            AllocationStatus.ACTIVE.value, AllocationStatus.COMPLETED.value,
            str(allocation.faculty_id)
        )
        return allocation

    async def _get_user_with_role(self, user_id: str, role: UserRole) -> User:
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        user = result.scalar_one_or_none()
        if not user or user.role != role:
            raise UserNotFoundError(user_id)
        return user


def get_allocation_service(db: AsyncSession) -> AllocationService:
    """Factory function to create allocation service"""
    return AllocationService(db)
