from marketplace.recommendations.history import (
    RECENTLY_VIEWED_LIMIT,
    VIEW_PINGS_LIMIT,
    claim_view_ping,
    clear_history,
    get_history,
    push_recently_viewed,
    record_history,
    sanitize_history,
)


def test_push_moves_id_to_front_without_duplicates():
    assert push_recently_viewed(["a", "b", "c"], "b") == ["b", "a", "c"]


def test_push_caps_history():
    history = [str(i) for i in range(RECENTLY_VIEWED_LIMIT)]
    result = push_recently_viewed(history, "new")
    assert len(result) == RECENTLY_VIEWED_LIMIT
    assert result[0] == "new"
    assert str(RECENTLY_VIEWED_LIMIT - 1) not in result


def test_push_does_not_mutate_history():
    history = ["a", "b"]
    push_recently_viewed(history, "c")
    assert history == ["a", "b"]


def test_sanitize_history_drops_garbage():
    assert sanitize_history(["a", "", None, 3, "b"]) == ["a", "b"]
    assert sanitize_history("a,b") == []
    assert sanitize_history(None) == []


def test_session_helpers_round_trip():
    session: dict = {}
    record_history(session, "1")
    record_history(session, "2")
    record_history(session, "1")
    assert get_history(session) == ["1", "2"]

    clear_history(session)
    assert get_history(session) == []


def test_view_ping_claimed_once_per_listing():
    session: dict = {}
    assert claim_view_ping(session, "1") is True
    assert claim_view_ping(session, "1") is False
    assert claim_view_ping(session, "2") is True


def test_view_pings_keep_only_the_newest():
    session: dict = {}
    for i in range(VIEW_PINGS_LIMIT + 5):
        claim_view_ping(session, str(i))

    assert len(session["viewed_pings"]) == VIEW_PINGS_LIMIT
    assert session["viewed_pings"][-1] == str(VIEW_PINGS_LIMIT + 4)
    # The oldest pings fell off, so those listings count again.
    assert claim_view_ping(session, "0") is True
    assert claim_view_ping(session, str(VIEW_PINGS_LIMIT + 4)) is False
