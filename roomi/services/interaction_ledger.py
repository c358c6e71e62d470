import redis.asyncio as redis
from loguru import logger
from pydantic import ValidationError

from roomi.core.constants import INTERACTIONS_KEY, LIKES_KEY, TARGETS_KEY
from roomi.core.errors import UnavailableError
from roomi.models.interaction import InteractionEvent, InteractionKind
from roomi.services.redis_service import RedisService, redis_service


class InteractionLedger:
    """
    Append-only log of like/pass events, indexed for the two lookups the
    engine needs: "has X liked Y" and "whom has X already acted on".

    Each append writes the event log entry and both indexes in one
    MULTI/EXEC transaction, so a lookup issued after append returns
    always observes it.
    """

    def __init__(self, redis_svc: RedisService = redis_service) -> None:
        self._redis = redis_svc

    async def append(self, event: InteractionEvent) -> None:
        from_id = event.from_user_id
        try:
            client = await self._redis.get_client()
            async with client.pipeline(transaction=True) as pipe:
                pipe.rpush(self._redis.key(INTERACTIONS_KEY, user_id=from_id), event.model_dump_json(by_alias=True))
                pipe.sadd(self._redis.key(TARGETS_KEY, user_id=from_id), event.to_user_id)
                if event.kind == InteractionKind.LIKE:
                    pipe.sadd(self._redis.key(LIKES_KEY, user_id=from_id), event.to_user_id)
                await pipe.execute()
        except (redis.RedisError, OSError) as exc:
            logger.error(f"[{from_id}] Failed to record {event.kind.value} for {event.to_user_id}: {exc}")
            raise UnavailableError("Interaction ledger unavailable") from exc

    async def exists_like(self, from_user_id: str, to_user_id: str) -> bool:
        try:
            client = await self._redis.get_client()
            return bool(await client.sismember(self._redis.key(LIKES_KEY, user_id=from_user_id), to_user_id))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"[{from_user_id}] Failed to look up like for {to_user_id}: {exc}")
            raise UnavailableError("Interaction ledger unavailable") from exc

    async def list_targets(self, from_user_id: str) -> set[str]:
        """Ids this user has liked or passed, in any number of events."""
        try:
            client = await self._redis.get_client()
            return set(await client.smembers(self._redis.key(TARGETS_KEY, user_id=from_user_id)))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"[{from_user_id}] Failed to list interaction targets: {exc}")
            raise UnavailableError("Interaction ledger unavailable") from exc

    async def list_events(self, from_user_id: str) -> list[InteractionEvent]:
        """Full event history of one user, oldest first, duplicates included."""
        try:
            client = await self._redis.get_client()
            raw_events = await client.lrange(self._redis.key(INTERACTIONS_KEY, user_id=from_user_id), 0, -1)
        except (redis.RedisError, OSError) as exc:
            logger.error(f"[{from_user_id}] Failed to read interaction history: {exc}")
            raise UnavailableError("Interaction ledger unavailable") from exc

        events = []
        for raw in raw_events:
            try:
                events.append(InteractionEvent.model_validate_json(raw))
            except ValidationError as exc:
                logger.warning(f"[{from_user_id}] Skipping malformed interaction event: {exc}")
        return events


interaction_ledger = InteractionLedger()
