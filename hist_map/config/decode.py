from __future__ import annotations

from datetime import date
from typing import Any, List, Mapping, Optional

from hist_map.core.model import (
    Address,
    ArtilleryHit,
    HitType,
    Position,
    is_hit_type,
)
from hist_map.validation.errors import ValidationError, ValidationIssue


def decode_hit(raw: Any, index: Optional[int] = None) -> ArtilleryHit:
    """
    Decode one untrusted hit record.

    Expected shape:

        {
            "type": 0 | 1 | 2,
            "date": "YYYY-MM-DD",
            "address": {"street": "...", "houseNumber": 5},
            "position": {"lat": 59.9, "lng": 30.3},
            "description": "..."        # optional
        }

    All problems are collected before raising, so one log line explains
    everything wrong with a record.

    :param index: position of the record in its file, carried on the error
    :raises ValidationError: if the record cannot be decoded
    """
    if not isinstance(raw, Mapping):
        raise ValidationError(
            [ValidationIssue("not_an_object", f"expected an object, got {type(raw).__name__}")],
            record_index=index,
        )

    issues: List[ValidationIssue] = []

    hit_type = raw.get("type")
    if not is_hit_type(hit_type):
        issues.append(ValidationIssue("unknown_hit_type", f"{hit_type!r} is not a hit type", "type"))

    hit_date = None
    try:
        hit_date = date.fromisoformat(raw.get("date"))
    except (TypeError, ValueError):
        issues.append(ValidationIssue("invalid_date", f"{raw.get('date')!r} is not YYYY-MM-DD", "date"))

    address = raw.get("address") if isinstance(raw.get("address"), Mapping) else {}
    street = address.get("street")
    house_number = address.get("houseNumber")
    if not isinstance(street, str):
        issues.append(ValidationIssue("missing_street", "street must be a string", "address.street"))
    if isinstance(house_number, bool) or not isinstance(house_number, int):
        issues.append(ValidationIssue("invalid_house_number", f"{house_number!r} is not an integer", "address.houseNumber"))

    position = raw.get("position") if isinstance(raw.get("position"), Mapping) else {}
    coords = {}
    for axis in ("lat", "lng"):
        value = position.get(axis)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(ValidationIssue("invalid_position", f"{value!r} is not a number", f"position.{axis}"))
        else:
            coords[axis] = float(value)

    description = raw.get("description")
    if description is not None and not isinstance(description, str):
        issues.append(ValidationIssue("invalid_description", "description must be a string", "description"))

    if issues:
        raise ValidationError(issues, record_index=index)

    return ArtilleryHit(
        type=HitType(hit_type),
        date=hit_date,
        address=Address(street=street, house_number=house_number),
        position=Position(lat=coords["lat"], lng=coords["lng"]),
        description=description,
    )
