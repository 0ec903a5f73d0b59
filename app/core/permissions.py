"""Account roles and the role gate used by every mutating operation."""

import enum

from app.core.errors import MissingRole, RoleNotAllowed


class Role(str, enum.Enum):
    ADMIN = "Admin"
    OFFICER = "Officer"
    PRIMER = "Primer"
    BOY = "Boy"


ALL_ROLES: frozenset[Role] = frozenset(Role)
MANAGER_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.OFFICER})


def authorize(role: str | None, allowed: frozenset[Role] = ALL_ROLES) -> Role:
    """
    Check that role is one of allowed; return it as a Role.

    Raises MissingRole when role is empty and RoleNotAllowed when it is
    unknown or outside the allowed set.
    """
    if not role:
        raise MissingRole()
    try:
        parsed = Role(role)
    except ValueError:
        raise RoleNotAllowed() from None
    if parsed not in allowed:
        raise RoleNotAllowed()
    return parsed
