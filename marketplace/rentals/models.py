from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class RentalStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    completed = "completed"


# Older rows store the Turkish UI labels instead of the enum values.
_STATUS_ALIASES: dict[str, RentalStatus] = {
    "pending": RentalStatus.pending,
    "bekliyor": RentalStatus.pending,
    "approved": RentalStatus.approved,
    "onaylandi": RentalStatus.approved,
    "onaylandı": RentalStatus.approved,
    "rejected": RentalStatus.rejected,
    "reddedildi": RentalStatus.rejected,
    "completed": RentalStatus.completed,
    "tamamlandi": RentalStatus.completed,
    "tamamlandı": RentalStatus.completed,
}

STATUS_LABELS_TR: dict[RentalStatus, str] = {
    RentalStatus.pending: "Bekliyor",
    RentalStatus.approved: "Onaylandı",
    RentalStatus.rejected: "Reddedildi",
    RentalStatus.completed: "Tamamlandı",
}


def normalize_rental_status(raw: str | None) -> RentalStatus | None:
    if raw is None:
        return None
    return _STATUS_ALIASES.get(str(raw).strip().lower())


class Rental(BaseModel):
    id: str
    user_email: str
    listing_id: str
    listing_title: str
    daily_price: float
    start_date: dt.date
    end_date: dt.date
    days: int
    total: float
    status: RentalStatus = RentalStatus.pending
    owner_email: str | None = None
    created_at: str

    @computed_field
    @property
    def status_label(self) -> str:
        return STATUS_LABELS_TR[self.status]


class RentalCreateRequest(BaseModel):
    listing_id: str = Field(..., min_length=1)
    start_date: dt.date
    end_date: dt.date


class RentalStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1)


class RentalListResponse(BaseModel):
    rentals: list[Rental]
