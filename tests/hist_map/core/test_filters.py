from __future__ import annotations

from datetime import date

from hist_map.core.filters import (
    check_front_line,
    check_hit,
    filter_front_lines,
    filter_hits,
)
from hist_map.core.model import (
    DEFAULT_APP_OPTIONS,
    HIT_TYPES,
    Address,
    ArtilleryHit,
    FrontLineElement,
    FrontLineFilters,
    FrontLineGeoJSON,
    FrontLineProps,
    HitFilters,
    HitType,
    Position,
)


def _make_hit(
    street: str = "Mira",
    house_number: int = 5,
    hit_date: date = date(2023, 5, 1),
    hit_type: HitType = HitType.Artillery,
) -> ArtilleryHit:
    return ArtilleryHit(
        type=hit_type,
        date=hit_date,
        address=Address(street=street, house_number=house_number),
        position=Position(lat=59.9, lng=30.3),
    )


def _make_hits():
    return [
        _make_hit("Mira", 5, date(2023, 5, 1), HitType.Artillery),
        _make_hit("Lenina", 10, date(2023, 6, 1), HitType.Fougasse),
        _make_hit("Prospekt Lenina", 3, date(2023, 7, 15), HitType.Incendiary),
    ]


def _make_front_line(*intervals) -> FrontLineGeoJSON:
    return FrontLineGeoJSON(
        features=tuple(
            FrontLineElement(
                properties=FrontLineProps(
                    description="",
                    action_header="",
                    date_start=start,
                    date_end=end,
                ),
                geometry={"type": "LineString", "coordinates": []},
            )
            for start, end in intervals
        )
    )


# -----------------------------------------------------------------------------
# check_hit
# -----------------------------------------------------------------------------
def test_default_filters_accept_every_hit():
    for hit in _make_hits():
        assert check_hit(hit, DEFAULT_APP_OPTIONS.hit)


def test_empty_types_match_nothing():
    filters = HitFilters(types=frozenset())
    for hit in _make_hits():
        assert not check_hit(hit, filters)


def test_street_is_case_sensitive_substring():
    filters = HitFilters(street="Lenina")
    results = [check_hit(h, filters) for h in _make_hits()]
    assert results == [False, True, True]

    assert not check_hit(_make_hit(street="Lenina"), HitFilters(street="lenina"))


def test_house_number_exact_match():
    filters = HitFilters(house_number=10)
    assert [check_hit(h, filters) for h in _make_hits()] == [False, True, False]


def test_house_number_zero_is_a_constraint():
    assert not check_hit(_make_hit(house_number=5), HitFilters(house_number=0))


def test_date_bounds_are_inclusive():
    hit = _make_hit(hit_date=date(2023, 5, 1))

    assert check_hit(hit, HitFilters(min_date=date(2023, 5, 1)))
    assert check_hit(hit, HitFilters(max_date=date(2023, 5, 1)))
    assert check_hit(hit, HitFilters(min_date=date(2023, 5, 1), max_date=date(2023, 5, 1)))

    assert not check_hit(hit, HitFilters(min_date=date(2023, 5, 2)))
    assert not check_hit(hit, HitFilters(max_date=date(2023, 4, 30)))


def test_inverted_date_range_matches_nothing():
    filters = HitFilters(min_date=date(2023, 12, 1), max_date=date(2023, 1, 1))
    assert filter_hits(_make_hits(), filters) == []


def test_type_inclusion():
    filters = HitFilters(types=frozenset({HitType.Fougasse}))
    assert [check_hit(h, filters) for h in _make_hits()] == [False, True, False]


def test_mira_scenario_keeps_first_hit_only():
    hits = [
        _make_hit("Mira", 5, date(2023, 5, 1), HitType.Artillery),
        _make_hit("Lenina", 10, date(2023, 6, 1), HitType.Fougasse),
    ]
    filters = HitFilters(street="Mira", types=frozenset(HIT_TYPES))

    assert filter_hits(hits, filters) == [hits[0]]


def test_filter_hits_preserves_order():
    hits = _make_hits()
    filters = HitFilters(types=frozenset({HitType.Incendiary, HitType.Artillery}))
    assert filter_hits(hits, filters) == [hits[0], hits[2]]


# -----------------------------------------------------------------------------
# check_front_line
# -----------------------------------------------------------------------------
def test_hidden_front_lines_are_always_rejected():
    fl = _make_front_line(("2023-01-01", "2023-12-31"))
    assert not check_front_line(fl, FrontLineFilters(show=False, date=None))
    assert not check_front_line(fl, FrontLineFilters(show=False, date=date(2023, 6, 1)))
    assert not check_front_line(_make_front_line(), FrontLineFilters(show=False))


def test_no_date_accepts_any_collection():
    filters = FrontLineFilters(show=True, date=None)
    assert check_front_line(_make_front_line(("2023-01-01", "2023-12-31")), filters)
    assert check_front_line(_make_front_line(("garbage", "garbage")), filters)
    assert check_front_line(_make_front_line(), filters)


def test_date_interval_is_inclusive():
    fl = _make_front_line(("2023-01-01", "2023-06-01"))
    assert check_front_line(fl, FrontLineFilters(date=date(2023, 1, 1)))
    assert check_front_line(fl, FrontLineFilters(date=date(2023, 6, 1)))
    assert not check_front_line(fl, FrontLineFilters(date=date(2023, 6, 2)))
    assert not check_front_line(fl, FrontLineFilters(date=date(2022, 12, 31)))


def test_every_feature_must_cover_the_date():
    fl = _make_front_line(
        ("2023-01-01", "2023-06-01"),
        ("2023-03-01", "2023-12-01"),
    )
    # Only the first feature covers February
    assert not check_front_line(fl, FrontLineFilters(date=date(2023, 2, 1)))
    # Both cover April
    assert check_front_line(fl, FrontLineFilters(date=date(2023, 4, 1)))


def test_malformed_feature_date_excludes_collection():
    fl = _make_front_line(
        ("2023-01-01", "2023-12-31"),
        ("2023-01-01", "31.12.2023"),
    )
    assert not check_front_line(fl, FrontLineFilters(date=date(2023, 6, 1)))


def test_filter_front_lines_preserves_order():
    early = _make_front_line(("1941-09-08", "1943-01-18"))
    late = _make_front_line(("1943-01-18", "1944-01-27"))
    other = _make_front_line(("1941-01-01", "1944-12-31"))

    selected = filter_front_lines([early, late, other], FrontLineFilters(date=date(1943, 1, 18)))
    assert selected == [early, late, other]

    selected = filter_front_lines([early, late, other], FrontLineFilters(date=date(1942, 1, 1)))
    assert selected == [early, other]
