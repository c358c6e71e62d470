from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis
from pydantic import ValidationError

from roomi.core.errors import UnavailableError
from roomi.models.interaction import InteractionEvent, InteractionKind
from roomi.models.match import Match
from roomi.services.interaction_ledger import InteractionLedger
from roomi.services.match_store import MatchStore
from roomi.services.profile_store import ProfileStore
from roomi.services.redis_service import RedisService


def like(from_id: str, to_id: str) -> InteractionEvent:
    return InteractionEvent(from_user_id=from_id, to_user_id=to_id, kind=InteractionKind.LIKE)


def pass_(from_id: str, to_id: str) -> InteractionEvent:
    return InteractionEvent(from_user_id=from_id, to_user_id=to_id, kind=InteractionKind.PASS)


@pytest.fixture
def broken_redis_svc() -> RedisService:
    client = MagicMock()
    for method in ("get", "mget", "zrange", "sismember", "smembers", "lrange", "set"):
        setattr(client, method, AsyncMock(side_effect=redis.ConnectionError("connection refused")))
    return RedisService(client=client, prefix="test:")


class TestProfileStore:
    async def test_get_missing_returns_none(self, profile_store):
        assert await profile_store.get("nobody") is None

    async def test_upsert_then_get(self, profile_store):
        await profile_store.upsert("A", {"budget": 1200, "location": "UM", "name": "Ana"})
        profile = await profile_store.get("A")

        assert profile.id == "A"
        assert profile.budget == 1200
        assert profile.model_extra["name"] == "Ana"

    async def test_upsert_merges_fields(self, profile_store):
        await profile_store.upsert("A", {"budget": 1200, "location": "UM"})
        await profile_store.upsert("A", {"leaseDuration": "12 months"})
        profile = await profile_store.get("A")

        assert profile.budget == 1200
        assert profile.location == "UM"
        assert profile.lease_duration == "12 months"

    async def test_upsert_accepts_field_names(self, profile_store):
        await profile_store.upsert("A", {"budget": 1200, "lifestylePreferences": {"noise": "quiet"}})
        await profile_store.upsert("A", {"lifestyle_preferences": {"noise": "loud"}, "lease_duration": "12m"})
        profile = await profile_store.get("A")

        assert profile.lifestyle_preferences == {"noise": "loud"}
        assert profile.lease_duration == "12m"
        assert profile.budget == 1200
        assert profile.model_extra == {}

    async def test_pool_index_uses_insert_sequence(self, profile_store, redis_client):
        for user_id in ("zed", "amy", "bob"):
            await profile_store.upsert(user_id, {})

        index = await redis_client.zrange("test:profiles", 0, -1, withscores=True)

        assert index == [("zed", 1.0), ("amy", 2.0), ("bob", 3.0)]

    async def test_upsert_rejects_invalid_profile(self, profile_store):
        with pytest.raises(ValidationError):
            await profile_store.upsert("A", {"budget": -1})
        assert await profile_store.get("A") is None

    async def test_scan_keeps_insertion_order_and_limit(self, profile_store):
        for user_id in ("u1", "u2", "u3", "u4"):
            await profile_store.upsert(user_id, {"budget": 500})
        # Updating an existing profile does not move it in the pool
        await profile_store.upsert("u1", {"budget": 700})

        assert [p.id for p in await profile_store.scan(10)] == ["u1", "u2", "u3", "u4"]
        assert [p.id for p in await profile_store.scan(2)] == ["u1", "u2"]
        assert await profile_store.scan(0) == []

    async def test_scan_skips_index_entries_without_documents(self, profile_store, redis_client):
        await profile_store.upsert("u1", {})
        await profile_store.upsert("u2", {})
        await redis_client.delete("test:profile:u1")

        assert [p.id for p in await profile_store.scan(10)] == ["u2"]

    async def test_get_raises_unavailable_on_redis_error(self, broken_redis_svc):
        with pytest.raises(UnavailableError):
            await ProfileStore(broken_redis_svc).get("A")


class TestInteractionLedger:
    async def test_exists_like_is_directional(self, ledger):
        await ledger.append(like("A", "B"))

        assert await ledger.exists_like("A", "B")
        assert not await ledger.exists_like("B", "A")

    async def test_pass_is_not_a_like(self, ledger):
        await ledger.append(pass_("A", "B"))

        assert not await ledger.exists_like("A", "B")
        assert await ledger.list_targets("A") == {"B"}

    async def test_list_targets_covers_likes_and_passes(self, ledger):
        await ledger.append(like("A", "B"))
        await ledger.append(pass_("A", "C"))

        assert await ledger.list_targets("A") == {"B", "C"}
        assert await ledger.list_targets("B") == set()

    async def test_duplicate_events_accumulate(self, ledger):
        for _ in range(3):
            await ledger.append(like("A", "B"))
        events = await ledger.list_events("A")

        assert len(events) == 3
        assert all(e.kind == InteractionKind.LIKE and e.to_user_id == "B" for e in events)
        assert await ledger.list_targets("A") == {"B"}

    async def test_exists_like_raises_unavailable_on_redis_error(self, broken_redis_svc):
        with pytest.raises(UnavailableError):
            await InteractionLedger(broken_redis_svc).exists_like("A", "B")


class TestMatchStore:
    async def test_create_if_absent_creates_once(self, match_store):
        created, first = await match_store.create_if_absent("A:B", Match(user_a="B", user_b="A", score=84))
        created_again, second = await match_store.create_if_absent("A:B", Match(user_a="A", user_b="B", score=10))

        assert created is True
        assert created_again is False
        assert second.id == first.id
        assert second.score == 84
        assert second.user_a == "B"

    async def test_get(self, match_store):
        assert await match_store.get("A:B") is None
        await match_store.create_if_absent("A:B", Match(user_a="A", user_b="B", score=50))

        assert (await match_store.get("A:B")).score == 50

    async def test_list_for_user(self, match_store):
        await match_store.create_if_absent("A:B", Match(user_a="A", user_b="B", score=50))
        await match_store.create_if_absent("A:C", Match(user_a="C", user_b="A", score=70))

        assert {m.pair_key for m in await match_store.list_for_user("A")} == {"A:B", "A:C"}
        assert [m.pair_key for m in await match_store.list_for_user("C")] == ["A:C"]
        assert await match_store.list_for_user("D") == []

    async def test_create_raises_unavailable_on_redis_error(self, broken_redis_svc):
        with pytest.raises(UnavailableError):
            await MatchStore(broken_redis_svc).create_if_absent("A:B", Match(user_a="A", user_b="B", score=1))
