from typing import Any, Literal

from pydantic import BaseModel, Field

from roomi.models.match import Match


class RankedCandidate(BaseModel):
    id: str
    score: int
    profile: dict[str, Any]


class CandidatesResponse(BaseModel):
    candidates: list[RankedCandidate] = Field(default_factory=list)


class LikeResult(BaseModel):
    matched: bool
    score: int | None = Field(default=None, description="Present only when the like completed a match")


class PassResult(BaseModel):
    ok: Literal[True] = True


class MatchesResponse(BaseModel):
    matches: list[Match] = Field(default_factory=list)
