"""Admin/owner role cache."""

import logging
from collections.abc import Awaitable, Callable, Iterable

from suppcache.core.entities.authority import (
    PRIVILEGED_ROLES,
    ROLE_ADMIN,
    ROLE_OWNER,
    Authority,
    PrivilegedPrincipal,
)
from suppcache.core.interfaces.role_store import IRoleStore

logger = logging.getLogger(__name__)

RoleLoader = Callable[[], Awaitable[Iterable[PrivilegedPrincipal]]]
RoleStoreFactory = Callable[[], IRoleStore]


class AuthorityCache:
    """Keeps the set of administrators and owners resident in memory.

    Roles are loaded once from the authoritative store and never expire.
    Stale data here grants or denies privileged access, so every role
    change must go through ``upsert_one``, ``remove_one``, ``invalidate``
    or ``cold_start``.

    A full load builds a fresh store and swaps it in only after the
    loader succeeded. Readers running during a reload keep seeing the
    previous snapshot.
    """

    def __init__(
        self,
        loader: RoleLoader,
        store_factory: RoleStoreFactory,
    ) -> None:
        """Initialize the authority cache.

        Args:
            loader: Coroutine function returning every privileged principal.
            store_factory: Builds an empty role store.
        """
        self._loader = loader
        self._store_factory = store_factory
        self._store = store_factory()
        self._owner_id: str | None = None
        self._loaded = False
        self._principal_count = 0
        self._generation = 0
        # One journal of role changes per load in flight
        self._journals: list[dict[str, str | None]] = []

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_warm(self) -> bool:
        """True once loaded with at least one privileged principal."""
        return self._loaded and not self._store.is_empty()

    async def get_role(self, user_id: str) -> str | None:
        """Return the privileged role of a user, or None."""
        await self._ensure_loaded()
        return self._store.get_role(user_id)

    async def is_admin(self, user_id: str) -> bool:
        return await self.get_role(user_id) == ROLE_ADMIN

    async def is_owner(self, user_id: str) -> bool:
        return await self.get_role(user_id) == ROLE_OWNER

    async def get_authority(self, user_id: str) -> Authority:
        """Resolve admin/owner status of a user in one lookup."""
        return Authority.for_role(await self.get_role(user_id))

    async def owner_id(self) -> str | None:
        await self._ensure_loaded()
        return self._owner_id

    async def cold_start(self) -> int:
        """Rebuild the cache from the authoritative store.

        Safe to call repeatedly and while reads are in flight. If the
        loader fails the exception propagates and the current snapshot
        is kept.

        ``upsert_one`` and ``remove_one`` calls made while the loader is
        suspended are replayed onto the new snapshot before it is swapped
        in. If ``invalidate`` runs meanwhile, the load is discarded and
        the cache stays unloaded.

        Returns:
            Number of privileged principals loaded, 0 if the load was
            discarded.
        """
        generation = self._generation
        journal: dict[str, str | None] = {}
        self._journals.append(journal)
        try:
            principals = list(await self._loader())
        finally:
            self._journals = [j for j in self._journals if j is not journal]

        if generation != self._generation:
            logger.info("Authority cache load discarded: invalidated while loading")
            return 0

        store = self._store_factory()
        owner_id: str | None = None
        count = 0
        for principal in principals:
            if not principal.is_privileged:
                continue
            store.set_role(principal.user_id, principal.role)
            count += 1
            if principal.role == ROLE_OWNER:
                owner_id = principal.user_id

        for user_id, role in journal.items():
            count += self._apply(store, user_id, role)
            if role == ROLE_OWNER:
                owner_id = user_id
            elif owner_id == user_id:
                owner_id = None

        self._store = store
        self._owner_id = owner_id
        self._principal_count = count
        self._loaded = True
        logger.info("Authority cache loaded: %d admins/owners, owner: %s", count, owner_id)
        return count

    def invalidate(self) -> None:
        """Drop every cached role; the next read reloads.

        Safe to call before anything was loaded. Loads still in flight
        are discarded.
        """
        self._generation += 1
        self._store = self._store_factory()
        self._owner_id = None
        self._principal_count = 0
        self._loaded = False
        logger.info("Authority cache invalidated")

    def upsert_one(self, user_id: str, role: str | None) -> None:
        """Apply a known role change to one user without reloading.

        A role outside the privileged set (or None) removes the user.
        Other users are untouched.

        Args:
            user_id: The user whose role changed.
            role: The user's new role.
        """
        if role not in PRIVILEGED_ROLES:
            self.remove_one(user_id)
            return

        self._record(user_id, role)
        self._principal_count += self._apply(self._store, user_id, role)
        if role == ROLE_OWNER:
            self._owner_id = user_id
        elif self._owner_id == user_id:
            self._owner_id = None
        logger.info("Authority cache updated: %s is now %s", user_id, role)

    def remove_one(self, user_id: str) -> bool:
        """Forget one user's privileged role.

        Returns:
            True if the user was cached.
        """
        self._record(user_id, None)
        removed = self._store.remove_user(user_id)
        if removed:
            self._principal_count -= 1
            logger.info("Authority cache removed %s", user_id)
        if self._owner_id == user_id:
            self._owner_id = None
        return removed

    def stats(self) -> dict[str, object]:
        return {
            "loaded": self._loaded,
            "principals": self._principal_count,
            "owner_id": self._owner_id,
        }

    async def _ensure_loaded(self) -> None:
        if not self._loaded:
            await self.cold_start()

    def _record(self, user_id: str, role: str | None) -> None:
        for journal in self._journals:
            journal[user_id] = role

    @staticmethod
    def _apply(store: IRoleStore, user_id: str, role: str | None) -> int:
        """Apply one change to a store; returns the principal count delta."""
        if role is None:
            return -1 if store.remove_user(user_id) else 0
        is_new = store.get_role(user_id) is None
        store.set_role(user_id, role)
        return 1 if is_new else 0
