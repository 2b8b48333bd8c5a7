from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..catalog.models import Listing

RELATED_LIMIT = 4
RECENT_STRIP_LIMIT = 4

# Tag match weights: the listing on screen counts more than browsing history.
VIEWED_TAG_WEIGHT = 2
CURRENT_TAG_WEIGHT = 3
# Price similarity contributes at most this much and is 0 at a 100% gap.
PRICE_WEIGHT = 3.0


def _price_score(price: float, focal_price: float) -> float:
    ratio = abs(price - focal_price) / max(focal_price, 1)
    return max(0.0, PRICE_WEIGHT - ratio * PRICE_WEIGHT)


def _score_candidate(
    listing: Listing,
    focal: Listing,
    viewed_tags: set[str],
    current_tags: set[str],
) -> float:
    viewed_overlap = sum(1 for t in listing.tags if t in viewed_tags)
    current_overlap = sum(1 for t in listing.tags if t in current_tags)
    return (
        viewed_overlap * VIEWED_TAG_WEIGHT
        + current_overlap * CURRENT_TAG_WEIGHT
        + _price_score(listing.daily_price, focal.daily_price)
    )


def resolve_recently_viewed(
    catalog: Sequence[Listing],
    recent_ids: Sequence[str],
    focal_id: str,
    limit: int = RECENT_STRIP_LIMIT,
) -> list[Listing]:
    """Map history ids to catalog listings, skipping the focal and unknown ids."""
    by_id = {p.id: p for p in catalog}
    resolved = [by_id[rid] for rid in recent_ids if rid and rid != focal_id and rid in by_id]
    return resolved[:limit]


def recommend(
    catalog: Sequence[Listing],
    focal: Listing,
    recently_viewed: Sequence[Listing],
    rented_ids: Iterable[str],
    viewer_email: str | None = None,
    limit: int = RELATED_LIMIT,
) -> list[Listing]:
    """Rank the rest of the catalog as "related items" for ``focal``.

    Never returns the focal listing, anything already in the viewer's history,
    anything the viewer has an active rental on, or the viewer's own listings.
    """
    excluded = {focal.id, *(p.id for p in recently_viewed), *rented_ids}
    current_tags = set(focal.tags)
    viewed_tags = set(current_tags)
    for p in recently_viewed:
        viewed_tags.update(p.tags)

    viewer = viewer_email.strip().lower() if viewer_email else None

    candidates = [
        p for p in catalog
        if p.id not in excluded
        and not (viewer and p.owner_email and p.owner_email.lower() == viewer)
    ]
    scored = [(_score_candidate(p, focal, viewed_tags, current_tags), p) for p in candidates]
    scored = sorted(scored, key=lambda item: item[0], reverse=True)
    return [p for _, p in scored[:limit]]
