from fastapi import APIRouter, Depends
from loguru import logger

from roomi.api.deps import get_matching_service
from roomi.api.errors import to_http_exception
from roomi.core.errors import MatchingError
from roomi.models.matching import MatchesResponse
from roomi.services.matching.service import MatchingService

router = APIRouter(tags=["matches"])


@router.get("/getMatches", response_model=MatchesResponse)
async def get_matches(userId: str, service: MatchingService = Depends(get_matching_service)) -> MatchesResponse:
    """List every match the user is part of, newest first."""
    try:
        return await service.get_matches(userId)
    except MatchingError as exc:
        logger.warning(f"[{userId}] Listing matches failed: {exc}")
        raise to_http_exception(exc) from exc
