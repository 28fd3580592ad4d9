"""Role store interface."""

from typing import Protocol


class IRoleStore(Protocol):
    """Contract for the resident map of privileged roles.

    The concrete store (plain dict, or an external accelerator) is
    chosen by whoever builds the ``AuthorityCache``.
    """

    def set_role(self, user_id: str, role: str) -> None:
        """Record the role of a user."""
        ...

    def get_role(self, user_id: str) -> str | None:
        """Return the role of a user, or None if not privileged."""
        ...

    def remove_user(self, user_id: str) -> bool:
        """Forget a user.

        Returns:
            True if the user was present.
        """
        ...

    def is_empty(self) -> bool:
        """Check whether no role is recorded."""
        ...
