import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roomi.shared.ids import pair_key


class MatchStatus(str, Enum):
    MATCHED = "matched"


class Match(BaseModel):
    """
    A mutual like between two users.

    user_a is the initiator (the second liker, whose call detected the
    reciprocal like) and user_b the respondent. The score is computed once,
    from user_a's point of view, and never recomputed.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    user_a: str
    user_b: str
    score: int = Field(ge=0, le=100)
    status: MatchStatus = MatchStatus.MATCHED
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def pair_key(self) -> str:
        return pair_key(self.user_a, self.user_b)

    def other_user(self, user_id: str) -> str:
        return self.user_b if user_id == self.user_a else self.user_a
