"""
Role-based permission tables for InternTrack workflows.

Every UserRole has an entry in each transition table. A ``None`` entry means
the role has no rights on that workflow at all.

Document status:
    student        own document, draft -> submitted only
    faculty/admin  any status, from any status (manual override)
    company        nothing

Internship application status:
    student        own application, pending -> withdrawn only
    faculty        applications to internships they created, pending -> accepted/rejected
    admin          any status, from any status
    company        nothing
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional
import enum

from app.core.exceptions import AuthorizationError, InvalidTransitionError
from app.models.user import User, UserRole
from app.models.document import DocumentStatus
from app.models.internship import ApplicationStatus


class Scope(str, enum.Enum):
    """Which records of a workflow a role may act on"""
    ANY = "any"
    OWNER = "owner"
    INTERNSHIP_CREATOR = "internship_creator"


@dataclass(frozen=True)
class TransitionRule:
    scope: Scope
    targets: Optional[FrozenSet[str]] = None  # None = any target status
    sources: Optional[FrozenSet[str]] = None  # None = any current status
    # Off-list targets are a permission failure rather than a bad edge
    forbid_other_targets: bool = False

    def allows_target(self, target: str) -> bool:
        return self.targets is None or target in self.targets

    def allows_source(self, current: str) -> bool:
        return self.sources is None or current in self.sources


UNRESTRICTED = TransitionRule(scope=Scope.ANY)


DOCUMENT_TRANSITIONS: Dict[UserRole, Optional[TransitionRule]] = {
    UserRole.STUDENT: TransitionRule(
        scope=Scope.OWNER,
        targets=frozenset({DocumentStatus.SUBMITTED.value}),
        sources=frozenset({DocumentStatus.DRAFT.value}),
        forbid_other_targets=True,
    ),
    UserRole.FACULTY: UNRESTRICTED,
    UserRole.ADMIN: UNRESTRICTED,
    UserRole.COMPANY: None,
}

APPLICATION_TRANSITIONS: Dict[UserRole, Optional[TransitionRule]] = {
    UserRole.STUDENT: TransitionRule(
        scope=Scope.OWNER,
        targets=frozenset({ApplicationStatus.WITHDRAWN.value}),
        sources=frozenset({ApplicationStatus.PENDING.value}),
    ),
    UserRole.FACULTY: TransitionRule(
        scope=Scope.INTERNSHIP_CREATOR,
        targets=frozenset({ApplicationStatus.ACCEPTED.value, ApplicationStatus.REJECTED.value}),
        sources=frozenset({ApplicationStatus.PENDING.value}),
    ),
    UserRole.ADMIN: UNRESTRICTED,
    UserRole.COMPANY: None,
}


# Roles allowed to run simple (non-transition) actions
ALLOCATION_MANAGERS = frozenset({UserRole.FACULTY, UserRole.ADMIN})
DOCUMENT_REVIEWERS = frozenset({UserRole.FACULTY, UserRole.ADMIN})
INTERNSHIP_PUBLISHERS = frozenset({UserRole.FACULTY, UserRole.ADMIN})
SESSION_HOSTS = frozenset({UserRole.FACULTY, UserRole.ADMIN})
RESOURCE_PUBLISHERS = frozenset({UserRole.FACULTY, UserRole.ADMIN, UserRole.COMPANY})
PROFILE_VIEWERS = frozenset({UserRole.FACULTY, UserRole.ADMIN})


def _value(status) -> str:
    return getattr(status, "value", status)


def require_role(actor: User, allowed: Iterable[UserRole], action: str) -> None:
    """Raise AuthorizationError unless the actor's role is in ``allowed``"""
    if actor.role not in allowed:
        raise AuthorizationError(f"Role '{_value(actor.role)}' cannot {action}")


def authorize_transition(
    table: Dict[UserRole, Optional[TransitionRule]],
    entity: str,
    actor: User,
    current,
    target,
    owner_id: Optional[str] = None,
    creator_id: Optional[str] = None,
) -> TransitionRule:
    """
    Check a status change against a transition table.

    Raises AuthorizationError when the role or the actor's relation to the
    record does not allow the change, and InvalidTransitionError when the
    role may act on the record but not along this edge.
    """
    rule = table.get(actor.role)
    if rule is None:
        raise AuthorizationError(f"Role '{_value(actor.role)}' cannot change {entity} status")

    actor_id = str(actor.id)
    if rule.scope == Scope.OWNER and actor_id != str(owner_id):
        raise AuthorizationError(f"You can only update your own {entity}")
    if rule.scope == Scope.INTERNSHIP_CREATOR and actor_id != str(creator_id):
        raise AuthorizationError(f"You can only update {entity}s for internships you created")

    current_value = _value(current)
    target_value = _value(target)
    if not rule.allows_target(target_value):
        if rule.forbid_other_targets:
            raise AuthorizationError(
                f"Role '{_value(actor.role)}' cannot set {entity} status to '{target_value}'"
            )
        raise InvalidTransitionError(entity, current_value, target_value)
    if not rule.allows_source(current_value):
        raise InvalidTransitionError(entity, current_value, target_value)

    return rule
