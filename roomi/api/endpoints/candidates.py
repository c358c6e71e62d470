from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from roomi.api.deps import get_matching_service
from roomi.api.errors import to_http_exception
from roomi.core.errors import MatchingError
from roomi.models.matching import CandidatesResponse
from roomi.services.matching.service import MatchingService

router = APIRouter(tags=["candidates"])


class CandidatesRequest(BaseModel):
    userId: str | None = Field(default=None, description="Requesting user")
    # Any JSON value; non-numeric input falls back to the default limit
    limit: Any = Field(default=None, description="Maximum candidates to return (1-50, default 20)")


async def _top_candidates(service: MatchingService, user_id: str | None, limit: Any) -> CandidatesResponse:
    if not user_id:
        raise HTTPException(status_code=400, detail="userId required")
    try:
        return await service.get_top_candidates(user_id, limit)
    except MatchingError as exc:
        logger.warning(f"[{user_id}] Candidate ranking failed: {exc}")
        raise to_http_exception(exc) from exc


@router.post("/getTopCandidates", response_model=CandidatesResponse)
async def get_top_candidates(
    payload: CandidatesRequest, service: MatchingService = Depends(get_matching_service)
) -> CandidatesResponse:
    return await _top_candidates(service, payload.userId, payload.limit)


@router.get("/candidates/{user_id}", response_model=CandidatesResponse)
async def list_candidates(
    user_id: str, limit: str | None = None, service: MatchingService = Depends(get_matching_service)
) -> CandidatesResponse:
    return await _top_candidates(service, user_id, limit)


@router.get("/getCandidates", response_model=CandidatesResponse)
async def get_candidates(
    userId: str | None = None, limit: str | None = None, service: MatchingService = Depends(get_matching_service)
) -> CandidatesResponse:
    return await _top_candidates(service, userId, limit)
