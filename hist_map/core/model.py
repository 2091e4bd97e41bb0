from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

# Storage format of front-line dateStart/dateEnd (YYYY-MM-DD)
FRONT_LINE_DATE_FORMAT = "%Y-%m-%d"
# Format for dates shown to the user (DD.MM.YYYY)
DATE_DISPLAY_FORMAT = "%d.%m.%Y"


@dataclass(frozen=True)
class Address:
    street: str
    house_number: int


@dataclass(frozen=True)
class Position:
    lat: float
    lng: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class House:
    address: Address
    position: Position


class HitType(enum.IntEnum):
    """
    Kind of strike. Integer values match the encoding used in hit records.
    """
    Fougasse = 0
    Artillery = 1
    Incendiary = 2


# Canonical display order. Drives option lists and the default type selection.
HIT_TYPES: Tuple[HitType, ...] = (
    HitType.Incendiary,
    HitType.Fougasse,
    HitType.Artillery,
)

_HIT_TYPE_TEXT: Dict[HitType, str] = {
    HitType.Artillery: "Артиллерийский снаряд",
    HitType.Fougasse: "Фугасная бомба",
    HitType.Incendiary: "Зажигательный снаряд",
}


def is_hit_type(value: Any) -> bool:
    """
    Return True if `value` is one of the HitType members.

    Used when decoding untrusted records; bools are rejected even though
    they are ints.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value in {t.value for t in HIT_TYPES}


def hit_type_text(hit_type: HitType) -> str:
    return _HIT_TYPE_TEXT[HitType(hit_type)]


@dataclass(frozen=True)
class ArtilleryHit:
    type: HitType
    date: date
    address: Address
    position: Position
    description: Optional[str] = None


class InvalidDate:
    """
    Result of parsing a malformed date string.

    Every ordering comparison against it is False, in both operand orders,
    so an interval with an invalid end never contains any date.
    """

    _instance: Optional["InvalidDate"] = None

    def __new__(cls) -> "InvalidDate":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __lt__(self, other: Any) -> bool:
        return False

    def __le__(self, other: Any) -> bool:
        return False

    def __gt__(self, other: Any) -> bool:
        return False

    def __ge__(self, other: Any) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "INVALID_DATE"


INVALID_DATE = InvalidDate()

ParsedDate = Union[date, InvalidDate]


def parse_front_line_date(text: str) -> ParsedDate:
    """
    Parse a front-line date in FRONT_LINE_DATE_FORMAT.

    Never raises: anything that does not parse yields INVALID_DATE.
    """
    try:
        return datetime.strptime(text, FRONT_LINE_DATE_FORMAT).date()
    except (TypeError, ValueError):
        return INVALID_DATE


def format_display_date(value: Optional[date]) -> str:
    if value is None or isinstance(value, InvalidDate):
        return ""
    return value.strftime(DATE_DISPLAY_FORMAT)


# -----------------------------------------------------------------------------
# Front lines
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class FrontLineProps:
    description: str
    action_header: str
    date_start: str
    date_end: str
    # Leaflet-style path options (color, weight, ...) carried through untouched
    style: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class FrontLineElement:
    properties: FrontLineProps
    geometry: Mapping[str, Any] = field(compare=False, hash=False)


@dataclass(frozen=True)
class FrontLineGeoJSON:
    """
    A front-line feature collection. Geometry is opaque to the filter logic.
    """
    features: Tuple[FrontLineElement, ...]
    name: str = ""

    @classmethod
    def from_geojson(cls, data: Mapping[str, Any], name: str = "") -> FrontLineGeoJSON:
        features = []
        for feature in data.get("features", []):
            props = dict(feature.get("properties") or {})
            features.append(
                FrontLineElement(
                    properties=FrontLineProps(
                        description=props.pop("description", ""),
                        action_header=props.pop("actionHeader", ""),
                        date_start=props.pop("dateStart", ""),
                        date_end=props.pop("dateEnd", ""),
                        style=props,
                    ),
                    geometry=feature.get("geometry") or {},
                )
            )
        return cls(features=tuple(features), name=name)

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {
                        **dict(f.properties.style),
                        "description": f.properties.description,
                        "actionHeader": f.properties.action_header,
                        "dateStart": f.properties.date_start,
                        "dateEnd": f.properties.date_end,
                    },
                    "geometry": dict(f.geometry),
                }
                for f in self.features
            ],
        }


# -----------------------------------------------------------------------------
# Filters
# -----------------------------------------------------------------------------
class AddressType(str, enum.Enum):
    # Not consumed by the predicates yet; kept for address resolution
    MODERN = "modern"
    HISTORIC = "historic"


@dataclass(frozen=True)
class HitFilters:
    """
    Hit filters.

    - street: substring match on the street name; "" means no constraint
    - house_number: exact match; None means no constraint
    - min_date / max_date: inclusive bounds; None means unbounded
    - types: hit types to include; an empty set matches nothing
    """
    street: str = ""
    house_number: Optional[int] = None
    addr_type: AddressType = AddressType.MODERN
    min_date: Optional[date] = None
    max_date: Optional[date] = None
    types: FrozenSet[HitType] = frozenset(HIT_TYPES)


@dataclass(frozen=True)
class FrontLineFilters:
    show: bool = True
    date: Optional[date] = None


@dataclass(frozen=True)
class AppOptions:
    hit: HitFilters = field(default_factory=HitFilters)
    front_line: FrontLineFilters = field(default_factory=FrontLineFilters)


DEFAULT_APP_OPTIONS = AppOptions()
