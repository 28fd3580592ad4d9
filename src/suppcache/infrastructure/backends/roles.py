"""In-memory role store implementation."""


class InMemoryRoleStore:
    """Role store backed by a plain dict."""

    def __init__(self) -> None:
        self._roles: dict[str, str] = {}

    def set_role(self, user_id: str, role: str) -> None:
        self._roles[user_id] = role

    def get_role(self, user_id: str) -> str | None:
        return self._roles.get(user_id)

    def remove_user(self, user_id: str) -> bool:
        return self._roles.pop(user_id, None) is not None

    def is_empty(self) -> bool:
        return not self._roles

    def __len__(self) -> int:
        return len(self._roles)
