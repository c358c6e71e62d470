from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class InteractionKind(str, Enum):
    LIKE = "like"
    PASS = "pass"


class InteractionEvent(BaseModel):
    """One like/pass action. Append-only, never mutated."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    from_user_id: str
    to_user_id: str
    kind: InteractionKind
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def _distinct_users(self) -> "InteractionEvent":
        if self.from_user_id == self.to_user_id:
            raise ValueError("fromUserId and toUserId must differ")
        return self
