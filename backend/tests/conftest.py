"""
InternTrack - Test Configuration and Fixtures
"""
import os
from datetime import date, datetime, timedelta
from itertools import count
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from faker import Faker

# Set testing environment
os.environ['TESTING'] = 'true'
os.environ['ENVIRONMENT'] = 'test'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'

from app.main import app
from app.core.database import Base, build_engine, get_db
from app.core.security import create_access_token
from app.models.user import User, UserRole
from app.models.document import Document, DocumentType, DocumentStatus
from app.models.allocation import FacultyAllocation, AllocationStatus
from app.models.internship import Internship, InternshipApplication, InternshipType, InternshipCategory, ApplicationStatus
from app.models.tech_session import TechSession

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = build_engine(TEST_DATABASE_URL)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# Rows created through the factories get strictly increasing created_at
# values so natural (created_at, id) ordering follows creation order.
BASE_TIME = datetime(2024, 1, 1, 9, 0, 0)
_tick = count()


def next_timestamp() -> datetime:
    return BASE_TIME + timedelta(seconds=next(_tick))


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================
# Factories
# ============================================

@pytest.fixture
def make_user(db_session: AsyncSession):
    """Create a user with the given role"""
    async def _make_user(role: UserRole = UserRole.STUDENT, **kwargs) -> User:
        user = User(
            username=kwargs.pop('username', fake.unique.user_name()),
            full_name=kwargs.pop('full_name', fake.name()),
            email=kwargs.pop('email', fake.unique.email()),
            role=role,
            is_active=kwargs.pop('is_active', True),
            created_at=kwargs.pop('created_at', next_timestamp()),
            **kwargs
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_document(db_session: AsyncSession):
    """Create a document owned by a user"""
    async def _make_document(
        owner: User,
        doc_type: DocumentType = DocumentType.OFFER_LETTER,
        status: DocumentStatus = DocumentStatus.DRAFT,
        **kwargs
    ) -> Document:
        document = Document(
            user_id=owner.id,
            doc_type=doc_type,
            status=status,
            file_path=kwargs.pop('file_path', f"uploads/{fake.uuid4()}.pdf"),
            file_name=kwargs.pop('file_name', 'offer.pdf'),
            created_at=kwargs.pop('created_at', next_timestamp()),
            **kwargs
        )
        db_session.add(document)
        await db_session.commit()
        await db_session.refresh(document)
        return document
    return _make_document


@pytest.fixture
def make_allocation(db_session: AsyncSession):
    """Insert an allocation row directly, bypassing the engine"""
    async def _make_allocation(
        faculty: User,
        student: User,
        status: AllocationStatus = AllocationStatus.ACTIVE
    ) -> FacultyAllocation:
        allocation = FacultyAllocation(
            faculty_id=faculty.id,
            student_id=student.id,
            status=status,
            created_at=next_timestamp()
        )
        db_session.add(allocation)
        await db_session.commit()
        await db_session.refresh(allocation)
        return allocation
    return _make_allocation


@pytest.fixture
def load_faculty(make_user, make_allocation):
    """Give a faculty member ``n`` active mentees"""
    async def _load_faculty(faculty: User, n: int) -> None:
        for _ in range(n):
            student = await make_user(UserRole.STUDENT)
            await make_allocation(faculty, student)
    return _load_faculty


@pytest.fixture
def make_internship(db_session: AsyncSession):
    async def _make_internship(creator: User, deadline: date = None, **kwargs) -> Internship:
        internship = Internship(
            title=kwargs.pop('title', fake.job()),
            company=kwargs.pop('company', fake.company()),
            location=kwargs.pop('location', fake.city()),
            duration=kwargs.pop('duration', '3 months'),
            stipend=kwargs.pop('stipend', '10000'),
            deadline=deadline or (date.today() + timedelta(days=30)),
            skills=kwargs.pop('skills', ['Python']),
            description=kwargs.pop('description', fake.text(max_nb_chars=200)),
            internship_type=kwargs.pop('internship_type', InternshipType.FULL_TIME),
            category=kwargs.pop('category', InternshipCategory.WEB_DEVELOPMENT),
            created_by=creator.id,
            created_at=kwargs.pop('created_at', next_timestamp()),
            **kwargs
        )
        db_session.add(internship)
        await db_session.commit()
        await db_session.refresh(internship)
        return internship
    return _make_internship


@pytest.fixture
def make_application(db_session: AsyncSession):
    async def _make_application(
        internship: Internship,
        student: User,
        status: ApplicationStatus = ApplicationStatus.PENDING
    ) -> InternshipApplication:
        application = InternshipApplication(
            internship_id=internship.id,
            student_id=student.id,
            status=status,
            phone='9876543210',
            semester='6',
            degree_program='B.Tech CSE',
            resume_path='uploads/resume.pdf'
        )
        db_session.add(application)
        await db_session.commit()
        await db_session.refresh(application)
        return application
    return _make_application


@pytest.fixture
def make_tech_session(db_session: AsyncSession):
    async def _make_tech_session(host: User, **kwargs) -> TechSession:
        session = TechSession(
            title=kwargs.pop('title', 'Intro to FastAPI'),
            description=kwargs.pop('description', fake.text(max_nb_chars=120)),
            date=kwargs.pop('date', datetime.utcnow() + timedelta(days=7)),
            start_time='10:00',
            end_time='12:00',
            location=kwargs.pop('location', 'Lab 3'),
            faculty_id=host.id,
            **kwargs
        )
        db_session.add(session)
        await db_session.commit()
        await db_session.refresh(session)
        return session
    return _make_tech_session


# ============================================
# Users per role
# ============================================

@pytest.fixture
async def student(make_user) -> User:
    return await make_user(UserRole.STUDENT)


@pytest.fixture
async def other_student(make_user) -> User:
    return await make_user(UserRole.STUDENT)


@pytest.fixture
async def faculty(make_user) -> User:
    return await make_user(UserRole.FACULTY)


@pytest.fixture
async def other_faculty(make_user) -> User:
    return await make_user(UserRole.FACULTY)


@pytest.fixture
async def admin_user(make_user) -> User:
    return await make_user(UserRole.ADMIN)


@pytest.fixture
async def company_user(make_user) -> User:
    return await make_user(UserRole.COMPANY, company_name='Acme Corp')


def headers_for(user: User) -> dict:
    """Generate authentication headers for a user"""
    token_data = {
        'sub': str(user.id),
        'role': user.role.value
    }
    token = create_access_token(token_data)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def student_headers(student: User) -> dict:
    return headers_for(student)


@pytest.fixture
def faculty_headers(faculty: User) -> dict:
    return headers_for(faculty)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return headers_for(admin_user)


@pytest.fixture
def auth_headers():
    """Factory for authentication headers of any user"""
    return headers_for
