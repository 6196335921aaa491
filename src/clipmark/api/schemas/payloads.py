from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _Payload(BaseModel):
    """Request body passed through to the repository for validation.

    Fields are untyped on purpose so bad input reaches the domain rules and
    comes back as a 400 rather than a schema error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CategoryPayload(_Payload):
    name: Any = None


class PlayerPayload(_Payload):
    name: Any = None
    number: Any = None


class TagPayload(_Payload):
    timestamp: Any = None
    category_id: Any = Field(default=None, alias="categoryId")
    description: Any = None
    player_ids: Any = Field(default=None, alias="playerIds")
    video_url: Any = Field(default=None, alias="videoUrl")


class ErrorResponse(BaseModel):
    detail: str


class HealthResponse(BaseModel):
    status: str
    storage: str
