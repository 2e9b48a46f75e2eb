"""Role-based authorization policy: map a session (or none) to allow/deny for a capability."""

import enum
from dataclasses import dataclass

from brainfeed.schemas.auth import SessionData
from brainfeed.services.errors import AuthorizationError


class Capability(str, enum.Enum):
    AUTHENTICATED = "authenticated"
    WRITER_OR_ADMIN = "writer_or_admin"
    ADMIN = "admin"


class DenyReason(str, enum.Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"


# Roles accepted per capability. Admin is listed explicitly; there is no role inheritance.
ALLOWED_ROLES: dict[Capability, frozenset[str] | None] = {
    Capability.AUTHENTICATED: None,
    Capability.WRITER_OR_ADMIN: frozenset({"writer", "admin"}),
    Capability.ADMIN: frozenset({"admin"}),
}

DENY_MESSAGES = {
    Capability.AUTHENTICATED: "Not authenticated",
    Capability.WRITER_OR_ADMIN: "Writer or admin access required",
    Capability.ADMIN: "Admin access required",
}


@dataclass(frozen=True)
class AuthDecision:
    allowed: bool
    reason: DenyReason | None = None


ALLOW = AuthDecision(allowed=True)


def authorize(session: SessionData | None, capability: Capability) -> AuthDecision:
    """Decide whether session may perform an operation requiring capability. Touches no data."""
    if session is None:
        return AuthDecision(allowed=False, reason=DenyReason.UNAUTHORIZED)
    roles = ALLOWED_ROLES[capability]
    if roles is None or session.role in roles:
        return ALLOW
    return AuthDecision(allowed=False, reason=DenyReason.FORBIDDEN)


def ensure_authorized(session: SessionData | None, capability: Capability) -> SessionData:
    """Return session if allowed; raise AuthorizationError otherwise."""
    decision = authorize(session, capability)
    if decision.allowed and session is not None:
        return session
    reason = decision.reason or DenyReason.UNAUTHORIZED
    if reason is DenyReason.UNAUTHORIZED:
        message = "Not authenticated"
    else:
        message = DENY_MESSAGES[capability]
    raise AuthorizationError(message, reason=reason.value)
