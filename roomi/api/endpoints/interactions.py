from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import AliasChoices, BaseModel, Field

from roomi.api.deps import get_matching_service
from roomi.api.errors import to_http_exception
from roomi.core.errors import MatchingError
from roomi.models.matching import LikeResult, PassResult
from roomi.services.matching.service import MatchingService

router = APIRouter(tags=["interactions"])


class InteractionRequest(BaseModel):
    current_user_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("currentUserId", "fromUserId"),
        description="User performing the swipe",
    )
    target_user_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("targetUserId", "toUserId"),
        description="User being liked or passed",
    )


@router.post("/likeUser", response_model=LikeResult, response_model_exclude_none=True)
async def like_user(
    payload: InteractionRequest, service: MatchingService = Depends(get_matching_service)
) -> LikeResult:
    try:
        return await service.like_user(payload.current_user_id, payload.target_user_id)
    except MatchingError as exc:
        logger.warning(f"[{payload.current_user_id}] Like of {payload.target_user_id} failed: {exc}")
        raise to_http_exception(exc) from exc


@router.post("/passUser", response_model=PassResult)
async def pass_user(
    payload: InteractionRequest, service: MatchingService = Depends(get_matching_service)
) -> PassResult:
    try:
        return await service.pass_user(payload.current_user_id, payload.target_user_id)
    except MatchingError as exc:
        logger.warning(f"[{payload.current_user_id}] Pass on {payload.target_user_id} failed: {exc}")
        raise to_http_exception(exc) from exc
