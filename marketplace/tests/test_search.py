from marketplace.catalog.models import Listing
from marketplace.search.ranker import exclude_owned, filter_by_tags, rank, score_listing


def _listing(listing_id, title, tags=None, description="", features=None, owner=None):
    return Listing(
        id=listing_id,
        title=title,
        description=description,
        tags=tags or [],
        features=features or [],
        daily_price=100,
        owner_email=owner,
    )


CATALOG = [
    _listing("1", "Bebek Arabası", ["şehir", "seyahat", "bebek", "araba"], "Hafif bebek arabası."),
    _listing("2", "Oto Koltuğu", ["araba", "seyahat", "bebek"], "Güvenli oto koltuğu."),
    _listing("3", "Mama Sandalyesi", ["ev", "beslenme", "bebek"], "Katlanabilir tasarım."),
    _listing("4", "Bebek Yatağı", ["ev", "uyku", "bebek"], "Ahşap ve sağlam."),
    _listing("5", "Oyun Halısı", ["oyun", "ev"], "Yumuşak halı."),
]


def test_rank_without_query_or_tags_is_identity():
    result = rank(CATALOG, [], "")
    assert [p.id for p in result] == [p.id for p in CATALOG]
    assert result is not CATALOG


def test_rank_tag_filter_requires_every_tag():
    result = rank(CATALOG, {"ev", "bebek"}, "")
    assert [p.id for p in result] == ["3", "4"]
    for p in result:
        assert {"ev", "bebek"} <= {t.lower() for t in p.tags}


def test_tag_filter_compares_stripped_lowercase_listing_tags():
    catalog = [_listing("a", "Park Yatak", [" Uyku ", "SEYAHAT"])]
    assert [p.id for p in filter_by_tags(catalog, ["uyku", "seyahat"])] == ["a"]


def test_rank_unknown_tag_returns_nothing():
    assert rank(CATALOG, ["kamp"], "") == []


def test_punctuation_only_query_means_no_query():
    result = rank(CATALOG, ["ev"], "  ?!.  ")
    assert [p.id for p in result] == ["3", "4", "5"]


def test_exact_phrase_listing_ranks_first():
    result = rank(CATALOG, [], "mama sandalyesi")
    assert result[0].id == "3"
    assert score_listing(CATALOG[2], "mama sandalyesi", ["mama", "sandalyesi"]) >= 8


def test_score_listing_breakdown_for_exact_title_token():
    listing = _listing("x", "Bebek Arabası")
    # phrase 8 + substring 3 + prefix 2 + exact token 2; distance 0 adds nothing
    assert score_listing(listing, "bebek", ["bebek"]) == 15


def test_score_listing_typo_gets_distance_bonus():
    listing = _listing("x", "Bebek")
    assert score_listing(listing, "bebk", ["bebk"]) == 2
    assert score_listing(listing, "beb", ["beb"]) == 8 + 3 + 2 + 1


def test_rank_query_is_folded_before_matching():
    result = rank(CATALOG, [], "OTO KOLTUĞU")
    assert result[0].id == "2"


def test_rank_drops_zero_scores():
    assert rank(CATALOG, [], "zzzzqqqq") == []


def test_rank_matches_typos():
    result = rank(CATALOG, [], "sandalye")
    assert [p.id for p in result][0] == "3"
    result = rank(CATALOG, [], "yatagi")
    assert result[0].id == "4"


def test_rank_ties_keep_catalog_order():
    catalog = [
        _listing("a", "Kanguru"),
        _listing("b", "Kanguru"),
        _listing("c", "Kanguru"),
    ]
    result = rank(catalog, [], "kanguru")
    assert [p.id for p in result] == ["a", "b", "c"]


def test_rank_title_only_listing_participates():
    catalog = [_listing("t", "Çocuk Bisikleti")]
    result = rank(catalog, [], "bisiklet")
    assert [p.id for p in result] == ["t"]


def test_rank_searches_features():
    catalog = [
        _listing("f", "Oto Koltuğu", features=["ISOFIX uyumlu"]),
        _listing("g", "Mama Sandalyesi"),
    ]
    assert [p.id for p in rank(catalog, [], "isofix")] == ["f"]


def test_rank_does_not_mutate_input():
    catalog = list(CATALOG)
    before = [p.id for p in catalog]
    rank(catalog, ["bebek"], "araba")
    assert [p.id for p in catalog] == before


def test_rank_is_idempotent():
    first = rank(CATALOG, ["bebek"], "bebek araba")
    second = rank(CATALOG, ["bebek"], "bebek araba")
    assert [p.id for p in first] == [p.id for p in second]


def test_exclude_owned_hides_viewer_listings_case_insensitively():
    catalog = [
        _listing("1", "A", owner="ayse@example.com"),
        _listing("2", "B", owner="mehmet@example.com"),
        _listing("3", "C"),
    ]
    assert [p.id for p in exclude_owned(catalog, "AYSE@example.com")] == ["2", "3"]
    assert [p.id for p in exclude_owned(catalog, None)] == ["1", "2", "3"]
