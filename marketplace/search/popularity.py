from __future__ import annotations

from collections.abc import Sequence

from ..catalog.models import Listing

POPULAR_LIMIT = 4


def sort_by_popularity(catalog: Sequence[Listing]) -> list[Listing]:
    """Most viewed first; among equal counts the newer listing wins."""
    # Two stable passes: secondary key first, then the primary key.
    by_recency = sorted(catalog, key=lambda p: p.created_at, reverse=True)
    return sorted(by_recency, key=lambda p: p.view_count, reverse=True)


def popular(catalog: Sequence[Listing], limit: int = POPULAR_LIMIT) -> list[Listing]:
    return sort_by_popularity(catalog)[:limit]
