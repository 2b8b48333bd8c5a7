from __future__ import annotations

from typing import Any

RECENTLY_VIEWED_LIMIT = 8
SESSION_HISTORY_KEY = "recently_viewed"
SESSION_VIEW_PINGS_KEY = "viewed_pings"
# The session lives in a signed cookie, so the ping list must stay small.
VIEW_PINGS_LIMIT = 32


def sanitize_history(raw: Any) -> list[str]:
    """Return the non-empty string ids of a stored history value."""
    if not isinstance(raw, list):
        return []
    return [x for x in raw if isinstance(x, str) and x]


def push_recently_viewed(
    history: list[str],
    listing_id: str,
    limit: int = RECENTLY_VIEWED_LIMIT,
) -> list[str]:
    """Move ``listing_id`` to the front of the history, deduplicated and capped."""
    rest = [x for x in sanitize_history(history) if x != listing_id]
    return [listing_id, *rest][:limit]


def get_history(session: dict) -> list[str]:
    return sanitize_history(session.get(SESSION_HISTORY_KEY))


def record_history(session: dict, listing_id: str) -> list[str]:
    history = push_recently_viewed(get_history(session), listing_id)
    session[SESSION_HISTORY_KEY] = history
    return history


def clear_history(session: dict) -> None:
    session.pop(SESSION_HISTORY_KEY, None)


def claim_view_ping(
    session: dict,
    listing_id: str,
    limit: int = VIEW_PINGS_LIMIT,
) -> bool:
    """
    Return ``True`` the first time a session views ``listing_id``.

    Only the newest ``limit`` pings are remembered; a listing that has
    dropped off the list counts again on its next view.
    """
    pings = sanitize_history(session.get(SESSION_VIEW_PINGS_KEY))
    if listing_id in pings:
        return False
    session[SESSION_VIEW_PINGS_KEY] = [*pings, listing_id][-limit:]
    return True
