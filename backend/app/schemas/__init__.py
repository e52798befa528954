# Pydantic schemas
from app.schemas.allocation import (
    AllocationCreate,
    AllocationResponse,
    FacultyWorkload,
    UnallocatedStudent,
    BulkAllocationResult,
)
from app.schemas.document import (
    DocumentCreate,
    DocumentStatusUpdate,
    DocumentResponse,
    FeedbackCreate,
    FeedbackResponse,
    DocumentStatistics,
)
from app.schemas.internship import (
    InternshipCreate,
    InternshipUpdate,
    InternshipResponse,
    InternshipListResponse,
    ApplicationCreate,
    ApplicationStatusUpdate,
    ApplicationResponse,
)
from app.schemas.tech_session import (
    TechSessionCreate,
    TechSessionUpdate,
    TechSessionResponse,
    RegistrationResponse,
)
from app.schemas.resource import (
    ResourceCreate,
    ResourceResponse,
)
from app.schemas.user import (
    UserResponse,
    UserUpdate,
    ProfileCompletion,
    MentorResponse,
)
