from __future__ import annotations

from typing import Iterable, List

from .model import (
    ArtilleryHit,
    FrontLineFilters,
    FrontLineGeoJSON,
    HitFilters,
    parse_front_line_date,
)


def check_hit(hit: ArtilleryHit, filters: HitFilters) -> bool:
    """
    Check if an artillery hit satisfies the hit filters.

    Every set field is a constraint; None (or "" for street) means the
    dimension is not filtered. An empty `types` set matches nothing.
    """
    if filters.street and filters.street not in hit.address.street:
        return False
    if filters.house_number is not None and hit.address.house_number != filters.house_number:
        return False
    if filters.min_date is not None and hit.date < filters.min_date:
        return False
    if filters.max_date is not None and hit.date > filters.max_date:
        return False
    if hit.type not in filters.types:
        return False
    return True


def check_front_line(front_line: FrontLineGeoJSON, filters: FrontLineFilters) -> bool:
    """
    Check if a front-line collection satisfies the front-line filters.

    With a date set, the collection is kept only when *every* feature's
    [dateStart, dateEnd] interval contains it (both ends inclusive).
    Unparseable feature dates never contain anything.
    """
    if not filters.show:
        return False
    if filters.date is None:
        return True

    query = filters.date
    return all(
        parse_front_line_date(feature.properties.date_start) <= query
        and parse_front_line_date(feature.properties.date_end) >= query
        for feature in front_line.features
    )


def filter_hits(hits: Iterable[ArtilleryHit], filters: HitFilters) -> List[ArtilleryHit]:
    return [hit for hit in hits if check_hit(hit, filters)]


def filter_front_lines(
    front_lines: Iterable[FrontLineGeoJSON],
    filters: FrontLineFilters,
) -> List[FrontLineGeoJSON]:
    return [fl for fl in front_lines if check_front_line(fl, filters)]
