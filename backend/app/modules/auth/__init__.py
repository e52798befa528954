# Authentication and authorization module

from app.modules.auth.dependencies import (
    get_current_user,
    require_roles,
    get_current_faculty,
    get_current_student,
)

from app.modules.auth.permissions import (
    Scope,
    TransitionRule,
    DOCUMENT_TRANSITIONS,
    APPLICATION_TRANSITIONS,
    ALLOCATION_MANAGERS,
    DOCUMENT_REVIEWERS,
    INTERNSHIP_PUBLISHERS,
    SESSION_HOSTS,
    RESOURCE_PUBLISHERS,
    PROFILE_VIEWERS,
    require_role,
    authorize_transition,
)

__all__ = [
    # User authentication
    "get_current_user",
    "require_roles",
    "get_current_faculty",
    "get_current_student",
    # Permission tables
    "Scope",
    "TransitionRule",
    "DOCUMENT_TRANSITIONS",
    "APPLICATION_TRANSITIONS",
    "ALLOCATION_MANAGERS",
    "DOCUMENT_REVIEWERS",
    "INTERNSHIP_PUBLISHERS",
    "SESSION_HOSTS",
    "RESOURCE_PUBLISHERS",
    "PROFILE_VIEWERS",
    "require_role",
    "authorize_transition",
]
