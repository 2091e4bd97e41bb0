from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

from hist_map.config.decode import decode_hit
from hist_map.config.model import DEFAULT_CENTER, DEFAULT_ZOOM, THEMES, GlobalConfig
from hist_map.core.exceptions import ConfigError, DataDecodeError
from hist_map.core.model import ArtilleryHit, FrontLineGeoJSON, Position
from hist_map.validation.errors import ValidationError

logger = logging.getLogger(__name__)


def _resolve(root: Path, raw: Optional[str]) -> Optional[Path]:
    # Absolute paths are used as-is, relative ones are resolved against the config root
    if raw is None:
        return None
    path = Path(raw)
    return path if path.is_absolute() else (root / path).resolve()


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json
            data/
                hits.json
                front_lines/
                    *.geojson

    The data locations are whatever global.json names in "hits_file" and
    "front_lines_dir"; the layout above is only the sample one.

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if required keys are missing or values are invalid.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    with global_path.open(encoding="utf-8") as f:
        raw = json.load(f)

    if "hits_file" not in raw:
        raise ConfigError(f"'hits_file' is required in {global_path}")

    theme = raw.get("theme", "dark")
    if theme not in THEMES:
        raise ConfigError(f"Unknown theme {theme!r}; expected one of {THEMES}")

    center_raw = raw.get("map_center")
    try:
        center = (
            Position(lat=float(center_raw["lat"]), lng=float(center_raw["lng"]))
            if center_raw is not None
            else DEFAULT_CENTER
        )
        zoom = float(raw.get("map_zoom", DEFAULT_ZOOM))
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid map_center/map_zoom in {global_path}: {e}") from e

    defaults = GlobalConfig(hits_file=Path(), front_lines_dir=None)
    return GlobalConfig(
        hits_file=_resolve(root, raw["hits_file"]),
        front_lines_dir=_resolve(root, raw.get("front_lines_dir")),
        ui_title=raw.get("ui_title", defaults.ui_title),
        subtitle=raw.get("subtitle", defaults.subtitle),
        theme=theme,
        map_center=center,
        map_zoom=zoom,
    )


def load_hits(path: Path) -> List[ArtilleryHit]:
    """
    Read a JSON array of hit records.

    Records that fail validation (unknown hit type, bad date, ...) are
    logged and left out; the rest keep their file order.
    """
    with Path(path).open(encoding="utf-8") as f:
        raw: Any = json.load(f)

    if not isinstance(raw, list):
        raise DataDecodeError(f"{path}: expected a JSON array of hit records")

    hits: List[ArtilleryHit] = []
    for idx, record in enumerate(raw):
        try:
            hits.append(decode_hit(record, index=idx))
        except ValidationError as e:
            logger.warning(
                "Skipping invalid hit record: %s",
                e,
                extra={"hits_file": str(path), "record_index": e.record_index},
            )

    logger.info(
        "Hits loaded",
        extra={"hits_file": str(path), "n_records": len(raw), "n_hits": len(hits)},
    )
    return hits


def _check_features(features: Any, source: str) -> None:
    if not isinstance(features, list):
        raise DataDecodeError(f"{source}: 'features' must be an array")
    for idx, feature in enumerate(features):
        if not isinstance(feature, dict):
            raise DataDecodeError(f"{source}: feature {idx} is not an object")
        props = feature.get("properties")
        if props is not None and not isinstance(props, dict):
            raise DataDecodeError(f"{source}: feature {idx} properties must be an object")


def load_front_lines(directory: Optional[Path]) -> List[FrontLineGeoJSON]:
    """
    Read every *.geojson file in `directory` (sorted by name) as a front-line
    collection. A missing directory means no front lines.
    """
    if directory is None or not Path(directory).is_dir():
        logger.warning(f"Front-line directory not found at: {directory}")
        return []

    front_lines: List[FrontLineGeoJSON] = []
    for geojson_file in sorted(Path(directory).glob("*.geojson")):
        with geojson_file.open(encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict) or raw.get("type") != "FeatureCollection":
            raise DataDecodeError(f"{geojson_file.name}: expected a GeoJSON FeatureCollection")
        _check_features(raw.get("features"), geojson_file.name)
        front_lines.append(FrontLineGeoJSON.from_geojson(raw, name=geojson_file.stem))

    logger.info(
        "Front lines loaded",
        extra={"front_lines_dir": str(directory), "n_front_lines": len(front_lines)},
    )
    return front_lines


def load_data(config: GlobalConfig) -> Tuple[List[ArtilleryHit], List[FrontLineGeoJSON]]:
    """
    Main entrypoint used by the UI: load hits and front lines named by the config.
    """
    return load_hits(config.hits_file), load_front_lines(config.front_lines_dir)
