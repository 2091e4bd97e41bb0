from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import InvalidPatchError
from .model import (
    DEFAULT_APP_OPTIONS,
    HIT_TYPES,
    AddressType,
    AppOptions,
    FrontLineFilters,
    HitFilters,
    HitType,
    is_hit_type,
)

logger = logging.getLogger(__name__)

OptionsPatch = Union[AppOptions, Mapping[str, Mapping[str, Any]]]

_SECTIONS = {
    "hit": HitFilters,
    "front_line": FrontLineFilters,
}


class StagedOptions:
    """
    Live/staging pair of AppOptions snapshots.

    `live` drives the filter engine and is what the map shows. `staging` is
    the copy the filter drawer edits; edits only reach `live` through
    `apply()`. Both values are immutable AppOptions, so every operation
    swaps a snapshot rather than mutating one.
    """

    def __init__(self, initial: AppOptions = DEFAULT_APP_OPTIONS):
        self._live = initial
        self._staging = initial

    @classmethod
    def from_dicts(
        cls,
        live: Optional[Mapping[str, Any]],
        staging: Optional[Mapping[str, Any]] = None,
    ) -> StagedOptions:
        """
        Rebuild the store from serialised snapshots (e.g. two dcc.Store values).
        A missing staging snapshot is seeded from live.
        """
        store = cls(options_from_dict(live) if live else DEFAULT_APP_OPTIONS)
        if staging:
            store._staging = options_from_dict(staging)
        return store

    @property
    def live(self) -> AppOptions:
        return self._live

    @property
    def staging(self) -> AppOptions:
        return self._staging

    @property
    def is_dirty(self) -> bool:
        return self._staging != self._live

    def mutate_staging(self, patch: OptionsPatch) -> AppOptions:
        """
        Merge `patch` into the current staging value. Live is untouched.

        :param patch: a full AppOptions (replaces staging) or a mapping like
            {"hit": {"street": "Mira"}, "front_line": {"show": False}}
        :return: the new staging value
        :raises InvalidPatchError: on unknown sections, field names or bad values
        """
        self._staging = merge_options(self._staging, patch)
        return self._staging

    def reset_staging(self) -> AppOptions:
        """Put the defaults into staging; still needs apply() to take effect."""
        return self.mutate_staging(DEFAULT_APP_OPTIONS)

    def apply(self) -> AppOptions:
        """Promote staging to live."""
        if self._live != self._staging:
            logger.info(
                "Applying staged options",
                extra={"options": options_to_dict(self._staging)},
            )
        self._live = self._staging
        return self._live

    def discard(self) -> AppOptions:
        """Abandon staged edits and re-seed staging from live."""
        self._staging = self._live
        return self._staging

    reseed = discard


def merge_options(base: AppOptions, patch: OptionsPatch) -> AppOptions:
    if isinstance(patch, AppOptions):
        return patch

    if not isinstance(patch, Mapping):
        raise InvalidPatchError(f"Options patch must be a mapping or AppOptions, got {type(patch).__name__}")

    unknown = set(patch) - set(_SECTIONS)
    if unknown:
        raise InvalidPatchError(f"Unknown options section(s): {sorted(unknown)}")

    updates: Dict[str, Any] = {}
    for section, section_patch in patch.items():
        if not isinstance(section_patch, Mapping):
            raise InvalidPatchError(f"Options section {section!r} must be a mapping")
        current = getattr(base, section)
        allowed = {f.name for f in dataclasses.fields(_SECTIONS[section])}
        bad = set(section_patch) - allowed
        if bad:
            raise InvalidPatchError(f"Unknown {section} field(s): {sorted(bad)}")

        coerced: Dict[str, Any] = {}
        for name, value in section_patch.items():
            try:
                coerced[name] = _coerce_field(name, value)
            except (TypeError, ValueError) as e:
                raise InvalidPatchError(f"Invalid {section}.{name}: {value!r}") from e
        updates[section] = dataclasses.replace(current, **coerced)

    return dataclasses.replace(base, **updates)


def _coerce_field(name: str, value: Any) -> Any:
    if name == "types":
        values = list(value)
        bad = [t for t in values if not is_hit_type(t)]
        if bad:
            raise InvalidPatchError(f"Unknown hit type(s): {bad}")
        return frozenset(HitType(t) for t in values)
    if name == "addr_type":
        return AddressType(value)
    if name in ("min_date", "max_date", "date"):
        return _parse_iso_date(value)
    if name == "street":
        return value or ""
    if name == "house_number":
        return _coerce_house_number(value)
    if name == "show":
        if not isinstance(value, bool):
            raise InvalidPatchError(f"front_line.show must be a boolean, got {value!r}")
        return value
    return value


def _coerce_house_number(value: Any) -> Optional[int]:
    # exact-match field: fractions are rejected, never truncated
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidPatchError(f"Invalid house number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise InvalidPatchError(f"Invalid house number: {value!r}")


def _parse_iso_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        # Dash date pickers may send a full ISO timestamp
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise InvalidPatchError(f"Invalid ISO date: {value!r}")


# -----------------------------------------------------------------------------
# Serialisation
# -----------------------------------------------------------------------------
def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def options_to_dict(options: AppOptions) -> Dict[str, Any]:
    hit = options.hit
    return {
        "hit": {
            "street": hit.street,
            "house_number": hit.house_number,
            "addr_type": hit.addr_type.value,
            "min_date": _iso(hit.min_date),
            "max_date": _iso(hit.max_date),
            "types": [int(t) for t in HIT_TYPES if t in hit.types],
        },
        "front_line": {
            "show": options.front_line.show,
            "date": _iso(options.front_line.date),
        },
    }


def options_from_dict(data: Mapping[str, Any]) -> AppOptions:
    hit_raw = data.get("hit") or {}
    fl_raw = data.get("front_line") or {}

    default_hit = DEFAULT_APP_OPTIONS.hit
    raw_types = hit_raw.get("types")
    if raw_types is None:
        types = default_hit.types
    else:
        types = frozenset(HitType(t) for t in raw_types if is_hit_type(t))

    house_number = hit_raw.get("house_number")

    return AppOptions(
        hit=HitFilters(
            street=hit_raw.get("street") or "",
            house_number=int(house_number) if house_number is not None else None,
            addr_type=AddressType(hit_raw.get("addr_type", default_hit.addr_type.value)),
            min_date=_parse_iso_date(hit_raw.get("min_date")),
            max_date=_parse_iso_date(hit_raw.get("max_date")),
            types=types,
        ),
        front_line=FrontLineFilters(
            show=bool(fl_raw.get("show", True)),
            date=_parse_iso_date(fl_raw.get("date")),
        ),
    )
