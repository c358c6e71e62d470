"""Shared fixtures: an in-process Redis (fakeredis) and services wired to it."""

import fakeredis
import pytest

from roomi.services.interaction_ledger import InteractionLedger
from roomi.services.match_store import MatchStore
from roomi.services.matching.service import MatchingService
from roomi.services.profile_store import ProfileStore
from roomi.services.redis_service import RedisService


@pytest.fixture
async def redis_client():
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def redis_svc(redis_client) -> RedisService:
    return RedisService(client=redis_client, prefix="test:")


@pytest.fixture
def profile_store(redis_svc) -> ProfileStore:
    return ProfileStore(redis_svc)


@pytest.fixture
def ledger(redis_svc) -> InteractionLedger:
    return InteractionLedger(redis_svc)


@pytest.fixture
def match_store(redis_svc) -> MatchStore:
    return MatchStore(redis_svc)


@pytest.fixture
def matching_service(profile_store, ledger, match_store) -> MatchingService:
    return MatchingService(profile_store, ledger, match_store)


# Profiles from the worked example: score(A, B) == score(B, A) == 84
PROFILE_A = {"budget": 1200, "location": "UM", "lifestylePreferences": {"noise": "quiet"}}
PROFILE_B = {"budget": 1000, "location": "UM", "lifestylePreferences": {"noise": "quiet"}}


@pytest.fixture
async def seeded(profile_store) -> ProfileStore:
    """Store holding A and B from the worked example."""
    await profile_store.upsert("A", PROFILE_A)
    await profile_store.upsert("B", PROFILE_B)
    return profile_store
