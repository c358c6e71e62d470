from fastapi import APIRouter
from pydantic import BaseModel, Field

from roomi.services.preferences import ExtractedPreferences, extract_preferences, generate_summary

router = APIRouter(prefix="/preferences", tags=["preferences"])


class ExtractRequest(BaseModel):
    text: str = Field(description="Free text, e.g. an onboarding voice transcript")


class ExtractResponse(BaseModel):
    preferences: ExtractedPreferences
    summary: str


@router.post("/extract", response_model=ExtractResponse)
async def extract(payload: ExtractRequest) -> ExtractResponse:
    preferences = extract_preferences(payload.text)
    return ExtractResponse(preferences=preferences, summary=generate_summary(preferences))
