from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..catalog.models import Listing
from .text import edit_distance, normalize, tokenize

PHRASE_BONUS = 8
SUBSTRING_BONUS = 3
PREFIX_BONUS = 2
EXACT_TOKEN_BONUS = 2

# Sentinel distance when a listing has no tokens at all.
_NO_MATCH_DISTANCE = 99


def exclude_owned(catalog: Sequence[Listing], viewer_email: str | None) -> list[Listing]:
    """Hide the viewer's own listings; anonymous viewers see everything."""
    if not viewer_email:
        return list(catalog)
    viewer = viewer_email.strip().lower()
    return [p for p in catalog if not p.owner_email or p.owner_email.lower() != viewer]


def filter_by_tags(catalog: Sequence[Listing], applied_tags: Iterable[str]) -> list[Listing]:
    """Keep listings carrying every applied tag (AND semantics)."""
    required = set(applied_tags)
    if not required:
        return list(catalog)
    return [
        p for p in catalog
        if required <= {t.strip().lower() for t in p.tags}
    ]


def _haystack(listing: Listing) -> str:
    fields = [listing.title, listing.description, *listing.tags, *listing.features]
    return normalize(" ".join(fields))


def score_listing(listing: Listing, query: str, query_tokens: list[str]) -> int:
    """Relevance of a listing for an already-normalized query."""
    hay = _haystack(listing)
    hay_tokens = tokenize(hay)

    score = 0
    if query in hay:
        score += PHRASE_BONUS

    for token in query_tokens:
        if token in hay:
            score += SUBSTRING_BONUS
        if any(t.startswith(token) for t in hay_tokens):
            score += PREFIX_BONUS
        best = min((edit_distance(token, t) for t in hay_tokens), default=_NO_MATCH_DISTANCE)
        if best == 1:
            score += 2
        elif best == 2:
            score += 1

    hay_token_set = set(hay_tokens)
    overlap = sum(1 for token in query_tokens if token in hay_token_set)
    score += overlap * EXACT_TOKEN_BONUS
    return score


def rank(
    catalog: Sequence[Listing],
    applied_tags: Iterable[str],
    search_text: str,
) -> list[Listing]:
    """Filter by tags, then order by fuzzy relevance to ``search_text``.

    With an empty (or punctuation-only) query the tag-filtered listings come
    back in catalog order. Otherwise listings scoring zero are dropped and the
    rest are sorted by descending score, ties keeping catalog order.
    """
    base = filter_by_tags(catalog, applied_tags)
    query = normalize(search_text)
    if not query:
        return base

    query_tokens = query.split()
    scored = [(score_listing(p, query, query_tokens), p) for p in base]
    scored = [item for item in scored if item[0] > 0]
    # sorted() is stable, so equal scores keep catalog order.
    scored = sorted(scored, key=lambda item: item[0], reverse=True)
    return [p for _, p in scored]
