from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Profile(BaseModel):
    """
    A user profile as the matching engine reads it.

    Only the fields the scorer needs are typed. Everything else the profile
    service stores (name, university, photos, ...) is kept as extra data and
    passed through untouched.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    budget: float = Field(default=0.0, ge=0, description="Monthly budget; missing values count as 0")
    location: str | None = Field(default=None, description="Free-text label, compared exactly")
    lifestyle_preferences: dict[str, str] = Field(
        default_factory=dict, description="Lifestyle category (e.g. 'noise') → preference value"
    )
    lease_duration: str | None = None

    @field_validator("budget", mode="before")
    @classmethod
    def _default_budget(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("lifestyle_preferences", mode="before")
    @classmethod
    def _default_lifestyle(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_public(self) -> dict[str, Any]:
        """Wire representation (camelCase keys, extra fields included)."""
        return self.model_dump(mode="json", by_alias=True)
