"""
Redis key templates. All keys are relative to settings.REDIS_KEY_PREFIX.
"""

PROFILE_KEY: str = "profile:{user_id}"
PROFILE_INDEX_KEY: str = "profiles"
PROFILE_SEQUENCE_KEY: str = "profiles:seq"

INTERACTIONS_KEY: str = "interactions:{user_id}"
TARGETS_KEY: str = "targets:{user_id}"
LIKES_KEY: str = "likes:{user_id}"

MATCH_KEY: str = "match:{pair_key}"
USER_MATCHES_KEY: str = "matches:{user_id}"
