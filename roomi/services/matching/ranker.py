from typing import Any

from loguru import logger

from roomi.core.config import settings
from roomi.core.errors import NotFoundError
from roomi.models.matching import RankedCandidate
from roomi.services.interaction_ledger import InteractionLedger
from roomi.services.matching.scorer import CompatibilityScorer
from roomi.services.profile_store import ProfileStore


def normalize_limit(limit: Any) -> int:
    """Coerce a caller-supplied limit into [1, MAX_CANDIDATE_LIMIT].

    Missing, non-numeric and non-positive values fall back to the default
    before clamping.
    """
    default = settings.DEFAULT_CANDIDATE_LIMIT
    if limit is None or isinstance(limit, bool):
        value = default
    else:
        try:
            value = int(float(limit))
        except (TypeError, ValueError, OverflowError):
            value = default
    if value <= 0:
        value = default
    return max(1, min(value, settings.MAX_CANDIDATE_LIMIT))


class CandidateRanker:
    """
    Ranks the bounded candidate pool for one requester.

    The pool is the first CANDIDATE_POOL_SIZE profiles of the store's scan
    order, so results are the best matches within that pool rather than
    across every profile.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        ledger: InteractionLedger,
        scorer: CompatibilityScorer | None = None,
        pool_size: int | None = None,
    ):
        self.profile_store = profile_store
        self.ledger = ledger
        self.scorer = scorer or CompatibilityScorer()
        self.pool_size = pool_size if pool_size is not None else settings.CANDIDATE_POOL_SIZE

    async def get_top_candidates(self, user_id: str, limit: Any = None) -> list[RankedCandidate]:
        requester = await self.profile_store.get(user_id)
        if requester is None:
            raise NotFoundError(f"User {user_id} not found")

        limit = normalize_limit(limit)
        excluded = await self.ledger.list_targets(user_id)
        excluded.add(user_id)

        pool = await self.profile_store.scan(self.pool_size)

        scored: list[RankedCandidate] = []
        for candidate in pool:
            if candidate.id in excluded:
                continue
            total, breakdown = self.scorer.score_breakdown(requester, candidate)
            logger.debug(f"[{user_id}] Candidate {candidate.id} scored {total}: {breakdown}")
            scored.append(RankedCandidate(id=candidate.id, score=total, profile=candidate.to_public()))

        # list.sort is stable: equal scores keep pool order
        scored.sort(key=lambda c: c.score, reverse=True)

        logger.info(
            f"[{user_id}] Ranked {len(scored)} candidates from a pool of {len(pool)} "
            f"({len(excluded) - 1} excluded), returning {min(limit, len(scored))}"
        )
        return scored[:limit]
