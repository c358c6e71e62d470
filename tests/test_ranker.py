import pytest

from roomi.core.errors import NotFoundError
from roomi.models.interaction import InteractionEvent, InteractionKind
from roomi.services.matching.ranker import CandidateRanker, normalize_limit


class TestNormalizeLimit:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, 20),
            (5, 5),
            ("7", 7),
            (1, 1),
            (50, 50),
            (51, 50),
            (1000, 50),
            (0, 20),
            (-3, 20),
            ("abc", 20),
            ("", 20),
            ([], 20),
            (True, 20),
            (float("nan"), 20),
            (float("inf"), 20),
            (12.9, 12),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_limit(raw) == expected


async def seed_pool(profile_store):
    await profile_store.upsert("me", {"budget": 1000, "location": "UM", "lifestylePreferences": {"noise": "quiet"}})
    # Insertion order matters for tie-breaking
    await profile_store.upsert("far", {"budget": 5000, "location": "NYC"})
    await profile_store.upsert("close", {"budget": 1000, "location": "UM", "lifestylePreferences": {"noise": "quiet"}})
    await profile_store.upsert("tie-1", {"budget": 1000, "location": "UM"})
    await profile_store.upsert("tie-2", {"budget": 1000, "location": "UM"})


class TestCandidateRanker:
    async def test_unknown_requester(self, profile_store, ledger):
        with pytest.raises(NotFoundError):
            await CandidateRanker(profile_store, ledger).get_top_candidates("unknown-id")

    async def test_sorted_by_score_with_stable_ties(self, profile_store, ledger):
        await seed_pool(profile_store)
        results = await CandidateRanker(profile_store, ledger).get_top_candidates("me")

        assert [c.id for c in results] == ["close", "tie-1", "tie-2", "far"]
        assert [c.score for c in results] == [90, 60, 60, 7]
        assert results[0].profile["location"] == "UM"

    async def test_never_returns_requester(self, profile_store, ledger):
        await seed_pool(profile_store)
        results = await CandidateRanker(profile_store, ledger).get_top_candidates("me")

        assert "me" not in {c.id for c in results}

    async def test_excludes_liked_and_passed(self, profile_store, ledger):
        await seed_pool(profile_store)
        await ledger.append(InteractionEvent(from_user_id="me", to_user_id="close", kind=InteractionKind.LIKE))
        await ledger.append(InteractionEvent(from_user_id="me", to_user_id="tie-2", kind=InteractionKind.PASS))

        results = await CandidateRanker(profile_store, ledger).get_top_candidates("me")

        assert [c.id for c in results] == ["tie-1", "far"]

    async def test_interactions_by_others_do_not_exclude(self, profile_store, ledger):
        await seed_pool(profile_store)
        await ledger.append(InteractionEvent(from_user_id="close", to_user_id="me", kind=InteractionKind.PASS))

        results = await CandidateRanker(profile_store, ledger).get_top_candidates("me")

        assert "close" in {c.id for c in results}

    async def test_limit(self, profile_store, ledger):
        await seed_pool(profile_store)
        results = await CandidateRanker(profile_store, ledger).get_top_candidates("me", limit=2)

        assert [c.id for c in results] == ["close", "tie-1"]

    async def test_pool_is_bounded(self, profile_store, ledger):
        await seed_pool(profile_store)
        # Pool of 3 holds me, far, close
        results = await CandidateRanker(profile_store, ledger, pool_size=3).get_top_candidates("me")

        assert [c.id for c in results] == ["close", "far"]

    async def test_requester_outside_pool_still_ranked(self, profile_store, ledger):
        await seed_pool(profile_store)
        await profile_store.upsert("late", {"budget": 1000})

        results = await CandidateRanker(profile_store, ledger, pool_size=2).get_top_candidates("late")

        assert [c.id for c in results] == ["me", "far"]
