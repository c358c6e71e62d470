import re

from roomi.core.errors import InvalidArgumentError

# Opaque ids (Firebase uids, slugs). ":" is reserved as the pair key separator.
USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.@-]{1,128}$")


def is_valid_user_id(user_id: str | None) -> bool:
    return isinstance(user_id, str) and bool(USER_ID_PATTERN.match(user_id))


def validate_pair(from_user_id: str | None, to_user_id: str | None) -> tuple[str, str]:
    """Validate the two ids of a like/pass action.

    Returns the ids unchanged, raises InvalidArgumentError otherwise.
    """
    if not is_valid_user_id(from_user_id):
        raise InvalidArgumentError(f"Invalid fromUserId: {from_user_id!r}")
    if not is_valid_user_id(to_user_id):
        raise InvalidArgumentError(f"Invalid toUserId: {to_user_id!r}")
    if from_user_id == to_user_id:
        raise InvalidArgumentError("fromUserId and toUserId must differ")
    return from_user_id, to_user_id


def pair_key(user_a: str, user_b: str) -> str:
    """Deterministic key for an unordered pair of user ids."""
    first, second = sorted((user_a, user_b))
    return f"{first}:{second}"
