"""
Unit Tests for the Allocation Service
"""
import pytest
from sqlalchemy import select, func

from app.core.exceptions import AllocationExistsError, FacultyAtCapacityError, UserNotFoundError
from app.models.user import UserRole
from app.models.document import DocumentType, DocumentStatus
from app.models.allocation import FacultyAllocation, AllocationStatus
from app.services.allocation_service import AllocationService, MAX_STUDENTS_PER_FACULTY


async def count_allocations(db_session, student_id=None) -> int:
    query = select(func.count(FacultyAllocation.id))
    if student_id:
        query = query.where(FacultyAllocation.student_id == student_id)
    result = await db_session.execute(query)
    return result.scalar()


class TestCapacityAndWorkloads:
    """Counting helpers"""

    @pytest.mark.asyncio
    async def test_student_count_ignores_completed(self, db_session, faculty, make_user, make_allocation):
        for status in (AllocationStatus.ACTIVE, AllocationStatus.ACTIVE, AllocationStatus.COMPLETED):
            await make_allocation(faculty, await make_user(UserRole.STUDENT), status=status)

        service = AllocationService(db_session)

        assert await service.get_faculty_student_count(faculty.id) == 2

    @pytest.mark.asyncio
    async def test_workloads_one_entry_per_faculty_in_natural_order(self, db_session, make_user, load_faculty):
        first = await make_user(UserRole.FACULTY, full_name="First Faculty")
        second = await make_user(UserRole.FACULTY, full_name="Second Faculty")
        await make_user(UserRole.ADMIN)
        await load_faculty(second, 3)

        workloads = await AllocationService(db_session).get_faculty_workloads()

        assert workloads == [
            {"faculty_id": first.id, "name": "First Faculty", "student_count": 0},
            {"faculty_id": second.id, "name": "Second Faculty", "student_count": 3},
        ]

    @pytest.mark.asyncio
    async def test_unallocated_excludes_completed_allocations(self, db_session, faculty, make_user, make_allocation):
        active = await make_user(UserRole.STUDENT)
        completed = await make_user(UserRole.STUDENT)
        free = await make_user(UserRole.STUDENT)
        await make_allocation(faculty, active)
        await make_allocation(faculty, completed, status=AllocationStatus.COMPLETED)

        unallocated = await AllocationService(db_session).get_unallocated_students()

        assert [s["id"] for s in unallocated] == [free.id]
        assert unallocated[0]["email"] == free.email


class TestAllocateStudent:
    """Tiered auto-allocation"""

    @pytest.mark.asyncio
    async def test_idempotent(self, db_session, faculty, student):
        service = AllocationService(db_session)

        first = await service.allocate_student(student.id)
        second = await service.allocate_student(student.id)

        assert first is not None
        assert second.id == first.id
        assert await count_allocations(db_session, student.id) == 1

    @pytest.mark.asyncio
    async def test_existing_completed_allocation_is_returned(self, db_session, faculty, student, make_allocation):
        completed = await make_allocation(faculty, student, status=AllocationStatus.COMPLETED)

        result = await AllocationService(db_session).allocate_student(student.id)

        assert result.id == completed.id
        assert await count_allocations(db_session, student.id) == 1

    @pytest.mark.asyncio
    async def test_same_employer_beats_least_loaded(self, db_session, make_user, make_document, load_faculty):
        idle = await make_user(UserRole.FACULTY)
        employer_match = await make_user(UserRole.FACULTY, company_name="Acme Corp")
        await load_faculty(employer_match, 4)
        student = await make_user(UserRole.STUDENT)
        await make_document(student, status=DocumentStatus.APPROVED, company_name="Acme Corp")

        allocation = await AllocationService(db_session).allocate_student(student.id)

        assert allocation.faculty_id == employer_match.id
        assert allocation.faculty_id != idle.id
        assert allocation.status == AllocationStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_only_approved_offer_letters_count(self, db_session, make_user, make_document, load_faculty):
        idle = await make_user(UserRole.FACULTY)
        employer_match = await make_user(UserRole.FACULTY, company_name="Acme Corp")
        await load_faculty(employer_match, 1)
        student = await make_user(UserRole.STUDENT)
        await make_document(student, status=DocumentStatus.SUBMITTED, company_name="Acme Corp")

        allocation = await AllocationService(db_session).allocate_student(student.id)

        assert allocation.faculty_id == idle.id

    @pytest.mark.asyncio
    async def test_latest_approved_offer_letter_wins(self, db_session, make_user, make_document):
        await make_user(UserRole.FACULTY)
        old_employer = await make_user(UserRole.FACULTY, company_name="Old Co")
        new_employer = await make_user(UserRole.FACULTY, company_name="New Co")
        student = await make_user(UserRole.STUDENT)
        await make_document(student, status=DocumentStatus.APPROVED, company_name="Old Co")
        await make_document(student, status=DocumentStatus.APPROVED, company_name="New Co")

        allocation = await AllocationService(db_session).allocate_student(student.id)

        assert allocation.faculty_id == new_employer.id
        assert allocation.faculty_id != old_employer.id

    @pytest.mark.asyncio
    async def test_same_cohort_when_employer_faculty_full(
        self, db_session, make_user, make_document, make_allocation, load_faculty
    ):
        await make_user(UserRole.FACULTY)  # idle, would win tier 3
        full_employer = await make_user(UserRole.FACULTY, company_name="Acme Corp")
        await load_faculty(full_employer, MAX_STUDENTS_PER_FACULTY)
        cohort_mentor = await make_user(UserRole.FACULTY)
        await load_faculty(cohort_mentor, 5)

        peer = await make_user(UserRole.STUDENT)
        await make_document(peer, status=DocumentStatus.APPROVED, company_name="Acme Corp")
        await make_allocation(cohort_mentor, peer)

        student = await make_user(UserRole.STUDENT)
        await make_document(student, status=DocumentStatus.APPROVED, company_name="Acme Corp")

        allocation = await AllocationService(db_session).allocate_student(student.id)

        assert allocation.faculty_id == cohort_mentor.id

    @pytest.mark.asyncio
    async def test_fallback_to_least_loaded_without_offer_letter(self, db_session, make_user, load_faculty):
        busy = await make_user(UserRole.FACULTY)
        quiet = await make_user(UserRole.FACULTY)
        await load_faculty(busy, 3)
        await load_faculty(quiet, 1)
        student = await make_user(UserRole.STUDENT)

        allocation = await AllocationService(db_session).allocate_student(student.id)

        assert allocation.faculty_id == quiet.id

    @pytest.mark.asyncio
    async def test_least_loaded_tie_keeps_natural_order(self, db_session, make_user):
        first = await make_user(UserRole.FACULTY)
        await make_user(UserRole.FACULTY)
        student = await make_user(UserRole.STUDENT)

        allocation = await AllocationService(db_session).allocate_student(student.id)

        assert allocation.faculty_id == first.id

    @pytest.mark.asyncio
    async def test_concrete_two_five_nine_scenario(self, db_session, make_user, load_faculty):
        loads = {}
        for n in (2, 5, 9):
            f = await make_user(UserRole.FACULTY)
            await load_faculty(f, n)
            loads[n] = f
        student = await make_user(UserRole.STUDENT)
        service = AllocationService(db_session)

        allocation = await service.allocate_student(student.id)

        assert allocation.faculty_id == loads[2].id
        assert await service.get_faculty_student_count(loads[2].id) == 3

    @pytest.mark.asyncio
    async def test_exhaustion_returns_none_and_creates_nothing(self, db_session, make_user, load_faculty):
        for _ in range(2):
            f = await make_user(UserRole.FACULTY)
            await load_faculty(f, MAX_STUDENTS_PER_FACULTY)
        student = await make_user(UserRole.STUDENT)
        before = await count_allocations(db_session)

        result = await AllocationService(db_session).allocate_student(student.id)

        assert result is None
        assert await count_allocations(db_session) == before
        assert await count_allocations(db_session, student.id) == 0

    @pytest.mark.asyncio
    async def test_no_faculty_at_all_returns_none(self, db_session, student):
        assert await AllocationService(db_session).allocate_student(student.id) is None


class TestBulkAllocation:
    """Sequential bulk allocation"""

    @pytest.mark.asyncio
    async def test_bulk_respects_capacity(self, db_session, make_user, load_faculty):
        faculty = await make_user(UserRole.FACULTY)
        await load_faculty(faculty, MAX_STUDENTS_PER_FACULTY - 2)
        for _ in range(5):
            await make_user(UserRole.STUDENT)
        service = AllocationService(db_session)

        result = await service.bulk_allocate_students()

        assert result == {"success": 2, "failed": 3}
        assert await service.get_faculty_student_count(faculty.id) == MAX_STUDENTS_PER_FACULTY
        assert len(await service.get_unallocated_students()) == 3

    @pytest.mark.asyncio
    async def test_bulk_spreads_students_by_load(self, db_session, make_user):
        a = await make_user(UserRole.FACULTY)
        b = await make_user(UserRole.FACULTY)
        for _ in range(4):
            await make_user(UserRole.STUDENT)
        service = AllocationService(db_session)

        result = await service.bulk_allocate_students()

        assert result == {"success": 4, "failed": 0}
        assert await service.get_faculty_student_count(a.id) == 2
        assert await service.get_faculty_student_count(b.id) == 2


class TestManualAllocation:
    """create_allocation and queries"""

    @pytest.mark.asyncio
    async def test_create_allocation(self, db_session, faculty, student):
        allocation = await AllocationService(db_session).create_allocation(faculty.id, student.id)

        assert allocation.faculty_id == faculty.id
        assert allocation.student_id == student.id
        assert allocation.status == AllocationStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_create_allocation_refuses_second(self, db_session, faculty, other_faculty, student):
        service = AllocationService(db_session)
        await service.create_allocation(faculty.id, student.id)

        with pytest.raises(AllocationExistsError):
            await service.create_allocation(other_faculty.id, student.id)

    @pytest.mark.asyncio
    async def test_create_allocation_wrong_roles(self, db_session, faculty, student):
        service = AllocationService(db_session)

        with pytest.raises(UserNotFoundError):
            await service.create_allocation(student.id, faculty.id)

    @pytest.mark.asyncio
    async def test_create_allocation_full_faculty(self, db_session, faculty, student, load_faculty):
        await load_faculty(faculty, MAX_STUDENTS_PER_FACULTY)

        with pytest.raises(FacultyAtCapacityError):
            await AllocationService(db_session).create_allocation(faculty.id, student.id)

    @pytest.mark.asyncio
    async def test_get_allocations_by_role(
        self, db_session, faculty, other_faculty, student, other_student, admin_user, company_user, make_allocation
    ):
        mine = await make_allocation(faculty, student)
        await make_allocation(other_faculty, other_student)
        service = AllocationService(db_session)

        assert [a.id for a in await service.get_allocations(faculty)] == [mine.id]
        assert [a.id for a in await service.get_allocations(student)] == [mine.id]
        assert len(await service.get_allocations(admin_user)) == 2
        assert await service.get_allocations(company_user) == []

    @pytest.mark.asyncio
    async def test_complete_allocation_frees_capacity(self, db_session, faculty, student, make_allocation):
        allocation = await make_allocation(faculty, student)
        service = AllocationService(db_session)

        completed = await service.complete_allocation(allocation.id)

        assert completed.status == AllocationStatus.COMPLETED
        assert completed.completed_at is not None
        assert await service.get_faculty_student_count(faculty.id) == 0
        assert await service.get_faculty_for_student(student.id) is None
        # Still not "unallocated"
        assert await service.get_unallocated_students() == []

    @pytest.mark.asyncio
    async def test_get_faculty_for_student(self, db_session, faculty, student, make_allocation):
        await make_allocation(faculty, student)

        mentor = await AllocationService(db_session).get_faculty_for_student(student.id)

        assert mentor.id == faculty.id
