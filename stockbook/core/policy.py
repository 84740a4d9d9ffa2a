"""Role tiers and the access policies built on them."""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    VIEWER = "Viewer"
    ADMIN = "Admin"
    SUPER_ADMIN = "Super Admin"


class Policy(str, Enum):
    AUTHENTICATED = "authenticated"
    ADMIN_OR_ABOVE = "admin_or_above"
    SUPER_ADMIN_ONLY = "super_admin_only"


POLICY_ROLES: dict[Policy, frozenset[UserRole]] = {
    Policy.AUTHENTICATED: frozenset(UserRole),
    Policy.ADMIN_OR_ABOVE: frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN}),
    Policy.SUPER_ADMIN_ONLY: frozenset({UserRole.SUPER_ADMIN}),
}

POLICY_DENIED_MESSAGES: dict[Policy, str] = {
    Policy.AUTHENTICATED: "Access forbidden",
    Policy.ADMIN_OR_ABOVE: "Access forbidden: Admin role required",
    Policy.SUPER_ADMIN_ONLY: "Access forbidden: Super Admin role required",
}

# Roles a super admin may assign when creating an account.
ASSIGNABLE_ROLES: frozenset[UserRole] = frozenset({UserRole.ADMIN, UserRole.VIEWER})


@dataclass(frozen=True)
class Identity:
    """The caller as embedded in a verified access token."""

    id: int
    username: str
    role: UserRole


def is_allowed(identity: Identity, policy: Policy) -> bool:
    return identity.role in POLICY_ROLES[policy]
