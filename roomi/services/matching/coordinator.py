from loguru import logger

from roomi.core.errors import NotFoundError
from roomi.models.interaction import InteractionEvent, InteractionKind
from roomi.models.match import Match
from roomi.models.matching import LikeResult, PassResult
from roomi.services.interaction_ledger import InteractionLedger
from roomi.services.match_store import MatchStore
from roomi.services.matching.scorer import CompatibilityScorer
from roomi.services.profile_store import ProfileStore
from roomi.shared.ids import pair_key, validate_pair


class MatchCoordinator:
    """
    Records likes and passes and turns reciprocal likes into matches.

    Per unordered pair: no interaction -> one-sided like -> matched. The
    like event is always appended before reciprocity is checked, and the
    match itself is written with a create-if-absent on the pair key, so
    concurrent reciprocal likes (from any number of processes) produce
    exactly one match.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        ledger: InteractionLedger,
        match_store: MatchStore,
        scorer: CompatibilityScorer | None = None,
    ):
        self.profile_store = profile_store
        self.ledger = ledger
        self.match_store = match_store
        self.scorer = scorer or CompatibilityScorer()

    async def record_like(self, from_user_id: str, to_user_id: str) -> LikeResult:
        from_user_id, to_user_id = validate_pair(from_user_id, to_user_id)

        await self.ledger.append(
            InteractionEvent(from_user_id=from_user_id, to_user_id=to_user_id, kind=InteractionKind.LIKE)
        )

        if not await self.ledger.exists_like(to_user_id, from_user_id):
            logger.debug(f"[{from_user_id}] Liked {to_user_id}, waiting for a like back")
            return LikeResult(matched=False)

        match = await self._create_match(initiator=from_user_id, respondent=to_user_id)
        return LikeResult(matched=True, score=match.score)

    async def record_pass(self, from_user_id: str, to_user_id: str) -> PassResult:
        from_user_id, to_user_id = validate_pair(from_user_id, to_user_id)

        await self.ledger.append(
            InteractionEvent(from_user_id=from_user_id, to_user_id=to_user_id, kind=InteractionKind.PASS)
        )
        logger.debug(f"[{from_user_id}] Passed on {to_user_id}")
        return PassResult()

    async def _create_match(self, initiator: str, respondent: str) -> Match:
        key = pair_key(initiator, respondent)

        # A match that already exists keeps its original score
        existing = await self.match_store.get(key)
        if existing is not None:
            logger.debug(f"[{initiator}] Match {key} already exists, score {existing.score}")
            return existing

        initiator_profile = await self.profile_store.get(initiator)
        respondent_profile = await self.profile_store.get(respondent)
        if initiator_profile is None or respondent_profile is None:
            missing = initiator if initiator_profile is None else respondent
            raise NotFoundError(f"User {missing} not found")

        score = self.scorer.score(initiator_profile, respondent_profile)
        created, match = await self.match_store.create_if_absent(
            key, Match(user_a=initiator, user_b=respondent, score=score)
        )
        if created:
            logger.info(f"[{initiator}] Matched with {respondent} (score {match.score})")
        else:
            logger.info(f"[{initiator}] Lost match race for {key}, using existing score {match.score}")
        return match
