import json
from typing import Any

import redis.asyncio as redis
from loguru import logger
from pydantic import ValidationError

from roomi.core.constants import PROFILE_INDEX_KEY, PROFILE_KEY, PROFILE_SEQUENCE_KEY
from roomi.core.errors import UnavailableError
from roomi.models.profile import Profile
from roomi.services.redis_service import RedisService, redis_service


class ProfileStore:
    """Redis-backed profile documents plus an insertion-ordered scan index."""

    def __init__(self, redis_svc: RedisService = redis_service) -> None:
        self._redis = redis_svc

    def _profile_key(self, user_id: str) -> str:
        return self._redis.key(PROFILE_KEY, user_id=user_id)

    @staticmethod
    def _decode(user_id: str, raw: str) -> Profile | None:
        try:
            return Profile.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"[{user_id}] Stored profile failed validation, ignoring it: {exc}")
            return None

    async def get(self, user_id: str) -> Profile | None:
        """Fetch a single profile, or None if it does not exist."""
        try:
            client = await self._redis.get_client()
            raw = await client.get(self._profile_key(user_id))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"[{user_id}] Failed to read profile: {exc}")
            raise UnavailableError("Profile store unavailable") from exc

        if not raw:
            return None
        return self._decode(user_id, raw)

    async def scan(self, limit: int) -> list[Profile]:
        """Return up to `limit` profiles in insertion order.

        This is the candidate pool source. It never reads past `limit`
        entries of the index, whatever the total number of profiles.
        """
        if limit <= 0:
            return []
        try:
            client = await self._redis.get_client()
            user_ids = await client.zrange(self._redis.key(PROFILE_INDEX_KEY), 0, limit - 1)
            if not user_ids:
                return []
            raw_profiles = await client.mget([self._profile_key(uid) for uid in user_ids])
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to scan profile pool (limit={limit}): {exc}")
            raise UnavailableError("Profile store unavailable") from exc

        profiles = []
        for user_id, raw in zip(user_ids, raw_profiles):
            if not raw:
                # Index entry without a document; the profile was removed elsewhere.
                continue
            profile = self._decode(user_id, raw)
            if profile is not None:
                profiles.append(profile)
        return profiles

    @staticmethod
    def _alias_keys(fields: dict[str, Any]) -> dict[str, Any]:
        """Rename field names (lease_duration) to their stored aliases (leaseDuration)."""
        aliases = {name: info.alias or name for name, info in Profile.model_fields.items()}
        return {aliases.get(key, key): value for key, value in fields.items()}

    async def upsert(self, user_id: str, fields: dict[str, Any]) -> Profile:
        """Merge `fields` into the stored profile, creating it if needed.

        Accepts both field names and their camelCase aliases.
        Raises pydantic.ValidationError if the merged document is not a valid profile.
        """
        key = self._profile_key(user_id)
        try:
            client = await self._redis.get_client()
            existing_raw = await client.get(key)
        except (redis.RedisError, OSError) as exc:
            logger.error(f"[{user_id}] Failed to read profile before update: {exc}")
            raise UnavailableError("Profile store unavailable") from exc

        document: dict[str, Any] = {}
        if existing_raw:
            try:
                document = json.loads(existing_raw)
            except json.JSONDecodeError:
                logger.warning(f"[{user_id}] Replacing undecodable profile document")
        document.update(self._alias_keys(fields))
        document["id"] = user_id

        profile = Profile.model_validate(document)

        try:
            sequence = await client.incr(self._redis.key(PROFILE_SEQUENCE_KEY))
            async with client.pipeline(transaction=True) as pipe:
                pipe.set(key, profile.model_dump_json(by_alias=True))
                # nx keeps the original position of an existing profile in the pool
                pipe.zadd(self._redis.key(PROFILE_INDEX_KEY), {user_id: sequence}, nx=True)
                await pipe.execute()
        except (redis.RedisError, OSError) as exc:
            logger.error(f"[{user_id}] Failed to write profile: {exc}")
            raise UnavailableError("Profile store unavailable") from exc

        logger.debug(f"[{user_id}] Profile {'updated' if existing_raw else 'created'}")
        return profile


profile_store = ProfileStore()
