"""Privileged principal entities."""

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_OWNER = "owner"
PRIVILEGED_ROLES = frozenset({ROLE_ADMIN, ROLE_OWNER})


@dataclass(frozen=True)
class PrivilegedPrincipal:
    """A user holding an administrative role."""

    user_id: str
    role: str

    @property
    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES


@dataclass(frozen=True)
class Authority:
    """Resolved authority of a single user."""

    is_admin: bool = False
    is_owner: bool = False
    role: str | None = None

    @classmethod
    def for_role(cls, role: str | None) -> "Authority":
        if role is None:
            return cls()
        return cls(
            is_admin=role == ROLE_ADMIN,
            is_owner=role == ROLE_OWNER,
            role=role,
        )
