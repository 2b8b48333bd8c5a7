from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Listing(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    daily_price: float = Field(..., gt=0)
    owner_email: str | None = None
    view_count: int = Field(default=0, ge=0)
    created_at: str = ""


class ListingsResponse(BaseModel):
    listings: list[Listing]
    total: int


class ListingCreateRequest(BaseModel):
    title: str = Field(..., max_length=200)
    description: str = Field(..., max_length=5000)
    daily_price: float
    tags: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _as_text_list(value: Any) -> list[str]:
    # CSV rows carry "a,b,c"; the products table carries real arrays.
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return []
    return [t for t in (_as_text(v) for v in items) if t]


def _as_price(value: Any) -> float | None:
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def _as_count(value: Any) -> int:
    try:
        count = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, count)


def listing_from_record(raw: Mapping[str, Any]) -> Listing | None:
    """Build a Listing from a raw catalog row, or ``None`` if it is unusable.

    Missing text becomes ``""``, missing collections become ``[]`` and a
    missing view counter becomes ``0``. Rows without an id, a title or a
    positive daily price are rejected.
    """
    listing_id = _as_text(raw.get("id"))
    title = _as_text(raw.get("title"))
    price = _as_price(raw.get("daily_price"))
    if not listing_id or not title or price is None:
        return None

    return Listing(
        id=listing_id,
        title=title,
        description=_as_text(raw.get("description")),
        tags=_as_text_list(raw.get("tags")),
        features=_as_text_list(raw.get("features")),
        daily_price=price,
        owner_email=_as_text(raw.get("owner_email")).lower() or None,
        view_count=_as_count(raw.get("view_count")),
        created_at=_as_text(raw.get("created_at")),
    )
