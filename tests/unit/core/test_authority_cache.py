"""Tests for AuthorityCache."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from suppcache import Authority, AuthorityCache, InMemoryRoleStore, PrivilegedPrincipal

PRINCIPALS = [
    PrivilegedPrincipal("u-owner", "owner"),
    PrivilegedPrincipal("u-admin-1", "admin"),
    PrivilegedPrincipal("u-admin-2", "admin"),
]


@pytest.fixture
def loader() -> AsyncMock:
    """Loader returning one owner and two admins."""
    return AsyncMock(return_value=list(PRINCIPALS))


@pytest.fixture
def authority(loader: AsyncMock) -> AuthorityCache:
    return AuthorityCache(loader=loader, store_factory=InMemoryRoleStore)


class TestColdStart:
    """Tests for loading roles."""

    @pytest.mark.asyncio
    async def test_cold_start_loads_roles(
        self, authority: AuthorityCache, loader: AsyncMock
    ) -> None:
        count = await authority.cold_start()

        assert count == 3
        assert authority.is_loaded
        assert authority.is_warm
        assert await authority.is_owner("u-owner")
        assert await authority.is_admin("u-admin-1")
        assert await authority.owner_id() == "u-owner"
        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_first_read_triggers_load(
        self, authority: AuthorityCache, loader: AsyncMock
    ) -> None:
        assert not authority.is_loaded

        assert await authority.get_role("u-admin-2") == "admin"
        assert await authority.get_role("u-nobody") is None
        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_privileged_rows_skipped(self) -> None:
        loader = AsyncMock(
            return_value=[
                PrivilegedPrincipal("u-admin", "admin"),
                PrivilegedPrincipal("u-user", "user"),
            ]
        )
        authority = AuthorityCache(loader=loader, store_factory=InMemoryRoleStore)

        assert await authority.cold_start() == 1
        assert await authority.get_role("u-user") is None

    @pytest.mark.asyncio
    async def test_empty_result_is_loaded_but_not_warm(self) -> None:
        authority = AuthorityCache(
            loader=AsyncMock(return_value=[]),
            store_factory=InMemoryRoleStore,
        )

        assert await authority.cold_start() == 0
        assert authority.is_loaded
        assert not authority.is_warm
        assert await authority.owner_id() is None

    @pytest.mark.asyncio
    async def test_failed_reload_keeps_previous_snapshot(
        self, authority: AuthorityCache, loader: AsyncMock
    ) -> None:
        """A loader error propagates and readers keep the old roles."""
        await authority.cold_start()
        loader.side_effect = ConnectionError("database down")

        with pytest.raises(ConnectionError):
            await authority.cold_start()

        assert authority.is_loaded
        assert await authority.is_owner("u-owner")

    @pytest.mark.asyncio
    async def test_failed_first_load_propagates(self) -> None:
        authority = AuthorityCache(
            loader=AsyncMock(side_effect=ConnectionError("database down")),
            store_factory=InMemoryRoleStore,
        )

        with pytest.raises(ConnectionError):
            await authority.is_admin("u-admin-1")
        assert not authority.is_loaded

    @pytest.mark.asyncio
    async def test_reads_during_reload_see_old_snapshot(
        self, authority: AuthorityCache, loader: AsyncMock
    ) -> None:
        await authority.cold_start()
        release = asyncio.Event()

        async def slow_loader() -> list[PrivilegedPrincipal]:
            await release.wait()
            return [PrivilegedPrincipal("u-new-owner", "owner")]

        loader.side_effect = slow_loader
        reload = asyncio.create_task(authority.cold_start())
        await asyncio.sleep(0)

        assert await authority.is_owner("u-owner")

        release.set()
        await reload
        assert await authority.is_owner("u-new-owner")
        assert not await authority.is_owner("u-owner")


class TestIncrementalUpdates:
    """Tests for single-user role changes."""

    @pytest.mark.asyncio
    async def test_promote_user(self, authority: AuthorityCache, loader: AsyncMock) -> None:
        await authority.cold_start()

        authority.upsert_one("u-new", "admin")

        assert await authority.is_admin("u-new")
        assert authority.stats()["principals"] == 4
        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_demote_user(self, authority: AuthorityCache) -> None:
        await authority.cold_start()

        authority.upsert_one("u-admin-1", "user")

        assert await authority.get_role("u-admin-1") is None
        assert await authority.is_admin("u-admin-2")
        assert authority.stats()["principals"] == 2

    @pytest.mark.asyncio
    async def test_ownership_transfer(self, authority: AuthorityCache) -> None:
        await authority.cold_start()

        authority.upsert_one("u-owner", "admin")
        assert await authority.owner_id() is None

        authority.upsert_one("u-admin-1", "owner")
        assert await authority.owner_id() == "u-admin-1"
        assert await authority.get_authority("u-admin-1") == Authority(
            is_admin=False, is_owner=True, role="owner"
        )

    @pytest.mark.asyncio
    async def test_remove_one(self, authority: AuthorityCache) -> None:
        await authority.cold_start()

        assert authority.remove_one("u-owner") is True
        assert authority.remove_one("u-owner") is False
        assert await authority.owner_id() is None

    @pytest.mark.asyncio
    async def test_unknown_user_authority(self, authority: AuthorityCache) -> None:
        assert await authority.get_authority("u-nobody") == Authority()


class TestInvalidate:
    """Tests for dropping the cache."""

    def test_invalidate_before_load(self, authority: AuthorityCache) -> None:
        authority.invalidate()

        assert not authority.is_loaded

    @pytest.mark.asyncio
    async def test_invalidate_reloads_on_next_read(
        self, authority: AuthorityCache, loader: AsyncMock
    ) -> None:
        await authority.cold_start()
        loader.return_value = [PrivilegedPrincipal("u-admin-3", "admin")]

        authority.invalidate()
        assert authority.stats() == {"loaded": False, "principals": 0, "owner_id": None}

        assert await authority.is_admin("u-admin-3")
        assert not await authority.is_owner("u-owner")
        assert loader.await_count == 2


class GatedLoader:
    """Loader that snapshots its source and then waits to be released."""

    def __init__(self, roles: dict[str, str]) -> None:
        self.roles = roles
        self.release = asyncio.Event()
        self.calls = 0

    async def __call__(self) -> list[PrivilegedPrincipal]:
        self.calls += 1
        snapshot = [PrivilegedPrincipal(user, role) for user, role in self.roles.items()]
        await self.release.wait()
        return snapshot


class TestChangesDuringReload:
    """Role changes made while a load is in flight survive the swap."""

    @pytest.mark.asyncio
    async def test_revocation_during_load_is_kept(self) -> None:
        loader = GatedLoader({"u1": "admin", "u2": "admin"})
        authority = AuthorityCache(loader=loader, store_factory=InMemoryRoleStore)

        load = asyncio.create_task(authority.cold_start())
        await asyncio.sleep(0)
        del loader.roles["u1"]
        authority.remove_one("u1")
        loader.release.set()

        assert await load == 1
        assert await authority.get_role("u1") is None
        assert await authority.is_admin("u2")
        assert authority.stats()["principals"] == 1

    @pytest.mark.asyncio
    async def test_promotion_during_load_is_kept(self) -> None:
        loader = GatedLoader({"u-owner": "owner"})
        authority = AuthorityCache(loader=loader, store_factory=InMemoryRoleStore)

        load = asyncio.create_task(authority.cold_start())
        await asyncio.sleep(0)
        authority.upsert_one("u-new", "owner")
        authority.upsert_one("u-owner", "admin")
        loader.release.set()
        await load

        assert await authority.owner_id() == "u-new"
        assert await authority.is_admin("u-owner")
        assert authority.stats()["principals"] == 2

    @pytest.mark.asyncio
    async def test_invalidate_during_load_discards_it(self) -> None:
        loader = GatedLoader({"u1": "admin"})
        authority = AuthorityCache(loader=loader, store_factory=InMemoryRoleStore)

        load = asyncio.create_task(authority.cold_start())
        await asyncio.sleep(0)
        authority.invalidate()
        loader.release.set()

        assert await load == 0
        assert not authority.is_loaded

        loader.roles = {"u2": "admin"}
        assert await authority.is_admin("u2")
        assert await authority.get_role("u1") is None
        assert loader.calls == 2
