from typing import Any

from roomi.core.errors import InvalidArgumentError
from roomi.models.matching import CandidatesResponse, LikeResult, MatchesResponse, PassResult
from roomi.services.interaction_ledger import InteractionLedger, interaction_ledger
from roomi.services.match_store import MatchStore, match_store
from roomi.services.matching.coordinator import MatchCoordinator
from roomi.services.matching.ranker import CandidateRanker
from roomi.services.matching.scorer import CompatibilityScorer
from roomi.services.profile_store import ProfileStore, profile_store
from roomi.shared.ids import is_valid_user_id


class MatchingService:
    """
    Transport-agnostic entry point for the matching engine.

    Every operation takes the acting user explicitly and keeps no state
    between calls beyond the backing stores.
    """

    def __init__(
        self,
        profiles: ProfileStore = profile_store,
        ledger: InteractionLedger = interaction_ledger,
        matches: MatchStore = match_store,
        pool_size: int | None = None,
    ):
        scorer = CompatibilityScorer()
        self.profiles = profiles
        self.matches = matches
        self.ranker = CandidateRanker(profiles, ledger, scorer, pool_size=pool_size)
        self.coordinator = MatchCoordinator(profiles, ledger, matches, scorer)

    async def get_top_candidates(self, user_id: str, limit: Any = None) -> CandidatesResponse:
        candidates = await self.ranker.get_top_candidates(user_id, limit)
        return CandidatesResponse(candidates=candidates)

    async def like_user(self, from_user_id: str, to_user_id: str) -> LikeResult:
        return await self.coordinator.record_like(from_user_id, to_user_id)

    async def pass_user(self, from_user_id: str, to_user_id: str) -> PassResult:
        return await self.coordinator.record_pass(from_user_id, to_user_id)

    async def get_matches(self, user_id: str) -> MatchesResponse:
        if not is_valid_user_id(user_id):
            raise InvalidArgumentError(f"Invalid userId: {user_id!r}")
        return MatchesResponse(matches=await self.matches.list_for_user(user_id))


matching_service = MatchingService()
