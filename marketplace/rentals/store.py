from __future__ import annotations

import datetime as dt
import uuid
from collections.abc import Iterable

from ..catalog.models import Listing
from .models import Rental, RentalStatus

_rentals: list[Rental] = []


def _now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def create_rental(
    listing: Listing,
    user_email: str,
    start_date: dt.date,
    end_date: dt.date,
) -> Rental:
    """Record a pending rental request. Raises ``ValueError`` on a bad range."""
    days = (end_date - start_date).days + 1
    if days <= 0:
        raise ValueError("end_date must not be before start_date")

    rental = Rental(
        id=str(uuid.uuid4()),
        user_email=user_email.strip().lower(),
        listing_id=listing.id,
        listing_title=listing.title,
        daily_price=listing.daily_price,
        start_date=start_date,
        end_date=end_date,
        days=days,
        total=listing.daily_price * days,
        status=RentalStatus.pending,
        owner_email=listing.owner_email,
        created_at=_now_iso(),
    )
    _rentals.append(rental)
    return rental


def _newest_first(rentals: Iterable[Rental]) -> list[Rental]:
    # Later records win ties on created_at.
    return sorted(reversed(list(rentals)), key=lambda r: r.created_at, reverse=True)


def get_rentals_for_user(user_email: str) -> list[Rental]:
    email = user_email.strip().lower()
    return _newest_first(r for r in _rentals if r.user_email == email)


def get_rentals_for_owner(owner_email: str) -> list[Rental]:
    email = owner_email.strip().lower()
    return _newest_first(r for r in _rentals if r.owner_email == email)


def get_rental(rental_id: str) -> Rental | None:
    for rental in _rentals:
        if rental.id == rental_id:
            return rental
    return None


def set_status(rental_id: str, status: RentalStatus) -> Rental | None:
    for i, rental in enumerate(_rentals):
        if rental.id == rental_id:
            updated = rental.model_copy(update={"status": status})
            _rentals[i] = updated
            return updated
    return None


def get_all_rentals() -> list[Rental]:
    return _rentals


def clear_rentals() -> None:
    _rentals.clear()


def active_rental_listing_ids(rentals: Iterable[Rental]) -> set[str]:
    """Listing ids whose latest rental by this viewer is not rejected."""
    latest: dict[str, RentalStatus] = {}
    for rental in _newest_first(rentals):
        if rental.listing_id and rental.listing_id not in latest:
            latest[rental.listing_id] = rental.status
    return {lid for lid, status in latest.items() if status is not RentalStatus.rejected}
