"""
Core domain layer: the record model, filter predicates, the live/staging
options store and the memoised selection.
"""

from .model import AppOptions, ArtilleryHit, FrontLineGeoJSON, HitType, HIT_TYPES, DEFAULT_APP_OPTIONS
from .filters import check_hit, check_front_line, filter_hits, filter_front_lines
from .staging import StagedOptions
from .selection import Selection, SelectionCache

__all__ = [
    "AppOptions",
    "ArtilleryHit",
    "FrontLineGeoJSON",
    "HitType",
    "HIT_TYPES",
    "DEFAULT_APP_OPTIONS",
    "check_hit",
    "check_front_line",
    "filter_hits",
    "filter_front_lines",
    "StagedOptions",
    "Selection",
    "SelectionCache",
]
