import redis.asyncio as redis
from loguru import logger
from pydantic import ValidationError

from roomi.core.constants import MATCH_KEY, USER_MATCHES_KEY
from roomi.core.errors import UnavailableError
from roomi.models.match import Match
from roomi.services.redis_service import RedisService, redis_service


class MatchStore:
    """Match records keyed by pair key. A key is written at most once (SET NX)."""

    def __init__(self, redis_svc: RedisService = redis_service) -> None:
        self._redis = redis_svc

    def _match_key(self, pair_key: str) -> str:
        return self._redis.key(MATCH_KEY, pair_key=pair_key)

    async def create_if_absent(self, pair_key: str, record: Match) -> tuple[bool, Match]:
        """Store `record` under `pair_key` unless a match already exists there.

        Returns (created, match) where match is the record now stored for the
        pair: `record` itself when created, otherwise the earlier one.
        """
        key = self._match_key(pair_key)
        try:
            client = await self._redis.get_client()
            created = bool(await client.set(key, record.model_dump_json(by_alias=True), nx=True))
            if created:
                stored = record
            else:
                raw = await client.get(key)
                if not raw:
                    # Match keys are never deleted, so a lost NX race always leaves a value behind.
                    raise UnavailableError(f"Match {pair_key} exists but could not be read")
                stored = Match.model_validate_json(raw)

            # Index updates are idempotent; running them on both paths repairs
            # an index left incomplete by an earlier failed call.
            async with client.pipeline(transaction=True) as pipe:
                pipe.sadd(self._redis.key(USER_MATCHES_KEY, user_id=stored.user_a), pair_key)
                pipe.sadd(self._redis.key(USER_MATCHES_KEY, user_id=stored.user_b), pair_key)
                await pipe.execute()
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to create match {pair_key}: {exc}")
            raise UnavailableError("Match store unavailable") from exc

        return created, stored

    async def get(self, pair_key: str) -> Match | None:
        try:
            client = await self._redis.get_client()
            raw = await client.get(self._match_key(pair_key))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to read match {pair_key}: {exc}")
            raise UnavailableError("Match store unavailable") from exc
        return Match.model_validate_json(raw) if raw else None

    async def list_for_user(self, user_id: str) -> list[Match]:
        """All matches involving `user_id`, newest first."""
        try:
            client = await self._redis.get_client()
            pair_keys = sorted(await client.smembers(self._redis.key(USER_MATCHES_KEY, user_id=user_id)))
            if not pair_keys:
                return []
            raw_matches = await client.mget([self._match_key(pk) for pk in pair_keys])
        except (redis.RedisError, OSError) as exc:
            logger.error(f"[{user_id}] Failed to list matches: {exc}")
            raise UnavailableError("Match store unavailable") from exc

        matches = []
        for pk, raw in zip(pair_keys, raw_matches):
            if not raw:
                continue
            try:
                matches.append(Match.model_validate_json(raw))
            except ValidationError as exc:
                logger.warning(f"[{user_id}] Skipping malformed match {pk}: {exc}")
        matches.sort(key=lambda m: m.created_at, reverse=True)
        return matches


match_store = MatchStore()
