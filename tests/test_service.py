import pytest

from roomi.core.errors import InvalidArgumentError, NotFoundError
from roomi.models.matching import LikeResult


class TestMatchingService:
    async def test_worked_example_end_to_end(self, matching_service, seeded):
        candidates = await matching_service.get_top_candidates("A")
        assert [(c.id, c.score) for c in candidates.candidates] == [("B", 84)]

        assert await matching_service.like_user("A", "B") == LikeResult(matched=False)
        assert await matching_service.like_user("B", "A") == LikeResult(matched=True, score=84)

        matches = await matching_service.get_matches("A")
        assert len(matches.matches) == 1

        # Liked users drop out of both sides' rankings
        assert (await matching_service.get_top_candidates("A")).candidates == []
        assert (await matching_service.get_top_candidates("B")).candidates == []

    async def test_unknown_requester(self, matching_service):
        with pytest.raises(NotFoundError):
            await matching_service.get_top_candidates("unknown-id")

    async def test_self_like(self, matching_service, seeded):
        with pytest.raises(InvalidArgumentError):
            await matching_service.like_user("A", "A")

    async def test_pass_result(self, matching_service, seeded):
        result = await matching_service.pass_user("A", "B")
        assert result.ok is True

    async def test_get_matches_validates_id(self, matching_service):
        with pytest.raises(InvalidArgumentError):
            await matching_service.get_matches("")

    async def test_limit_applies(self, matching_service, seeded, profile_store):
        for i in range(60):
            await profile_store.upsert(f"extra-{i}", {"budget": 1000})

        assert len((await matching_service.get_top_candidates("A", limit=500)).candidates) == 50
        assert len((await matching_service.get_top_candidates("A", limit=-1)).candidates) == 20
        assert len((await matching_service.get_top_candidates("A", limit=3)).candidates) == 3
