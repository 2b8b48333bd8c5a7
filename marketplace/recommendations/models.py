from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from ..catalog.models import Listing


class SearchRequest(BaseModel):
    tags: list[str] = Field(default_factory=list, description="Tags every result must carry")
    q: str = Field(default="", max_length=200, description="Free-text search query")

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, value: list[str]) -> list[str]:
        return [t.strip().lower() for t in value if t.strip()]


class RelatedResponse(BaseModel):
    listing_id: str
    recently_viewed: list[Listing]
    related: list[Listing]


class HistoryResponse(BaseModel):
    recently_viewed: list[str]
    view_counted: bool = False


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
