from fastapi import HTTPException

from roomi.core.errors import InvalidArgumentError, MatchingError, NotFoundError, UnavailableError


def to_http_exception(exc: MatchingError) -> HTTPException:
    """Map an engine error onto the HTTP status the mobile client expects."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc) or "Not found")
    if isinstance(exc, InvalidArgumentError):
        return HTTPException(status_code=400, detail=str(exc) or "Invalid argument")
    if isinstance(exc, UnavailableError):
        return HTTPException(status_code=503, detail="Storage temporarily unavailable.")
    return HTTPException(status_code=500, detail=str(exc))
