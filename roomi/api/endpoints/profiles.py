from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from roomi.api.deps import get_profile_store
from roomi.api.errors import to_http_exception
from roomi.core.errors import MatchingError
from roomi.core.security import redact_email
from roomi.services.profile_store import ProfileStore
from roomi.shared.ids import is_valid_user_id

router = APIRouter(tags=["profiles"])


class CreateUserRequest(BaseModel):
    userId: str | None = None
    profile: dict[str, Any] | None = Field(default=None, description="Profile document to merge")


class UpdateProfileRequest(BaseModel):
    """userId plus any profile fields, sent flat."""

    model_config = ConfigDict(extra="allow")

    userId: str | None = None


async def _merge_profile(store: ProfileStore, user_id: str, fields: dict[str, Any]) -> None:
    try:
        profile = await store.upsert(user_id, fields)
    except ValidationError as exc:
        messages = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors())
        raise HTTPException(status_code=400, detail=f"Invalid profile: {messages}") from exc
    except MatchingError as exc:
        raise to_http_exception(exc) from exc

    email = (profile.model_extra or {}).get("email")
    logger.info(f"[{user_id}] Profile saved (email {redact_email(email)})")


@router.post("/createUser", status_code=201)
async def create_user(payload: CreateUserRequest, store: ProfileStore = Depends(get_profile_store)) -> dict:
    if not payload.userId or payload.profile is None:
        raise HTTPException(status_code=400, detail="userId and profile required")
    if not is_valid_user_id(payload.userId):
        raise HTTPException(status_code=400, detail="Invalid userId")
    await _merge_profile(store, payload.userId, payload.profile)
    return {"ok": True}


@router.put("/updateProfile")
async def update_profile(payload: UpdateProfileRequest, store: ProfileStore = Depends(get_profile_store)) -> dict:
    if not payload.userId or not is_valid_user_id(payload.userId):
        raise HTTPException(status_code=400, detail="Valid userId required")
    fields = dict(payload.model_extra or {})
    if not fields:
        raise HTTPException(status_code=400, detail="No profile fields supplied")
    await _merge_profile(store, payload.userId, fields)
    return {"ok": True}
