class MatchingError(Exception):
    """Base class for errors surfaced by the matching engine."""


class NotFoundError(MatchingError):
    """A referenced profile does not exist."""


class InvalidArgumentError(MatchingError):
    """Caller supplied a self-referential or malformed user id."""


class UnavailableError(MatchingError):
    """A backing store call failed. Retry policy belongs to the caller."""
