from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from .filters import filter_front_lines, filter_hits
from .model import AppOptions, ArtilleryHit, FrontLineGeoJSON

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Filtered hits and front lines, in input order."""
    hits: Tuple[ArtilleryHit, ...]
    front_lines: Tuple[FrontLineGeoJSON, ...]


class SelectionCache:
    """
    Memoised filtering of the input arrays against the committed options.

    Keyed on the identity of the input sequences plus the (hashable)
    AppOptions value, so a re-render with unchanged inputs and options does
    not repeat the linear pass. Input sequences are held alongside each
    entry so their ids cannot be recycled while cached.
    """

    MAX_SELECTION_CACHE = 32

    def __init__(self) -> None:
        self._cache: Dict[
            Tuple[int, int, AppOptions],
            Tuple[Sequence[ArtilleryHit], Sequence[FrontLineGeoJSON], Selection],
        ] = {}

    def select(
        self,
        hits: Sequence[ArtilleryHit],
        front_lines: Sequence[FrontLineGeoJSON],
        options: AppOptions,
    ) -> Selection:
        key = (id(hits), id(front_lines), options)
        cached = self._cache.get(key)
        if cached is not None and cached[0] is hits and cached[1] is front_lines:
            return cached[2]

        selection = Selection(
            hits=tuple(filter_hits(hits, options.hit)),
            front_lines=tuple(filter_front_lines(front_lines, options.front_line)),
        )
        logger.debug(
            "Selection recomputed",
            extra={
                "n_hits": len(hits),
                "n_selected_hits": len(selection.hits),
                "n_front_lines": len(front_lines),
                "n_selected_front_lines": len(selection.front_lines),
            },
        )

        self._cache[key] = (hits, front_lines, selection)

        # Prevent unbounded growth
        if len(self._cache) > self.MAX_SELECTION_CACHE:
            self._cache.clear()

        return selection

    def clear(self) -> None:
        self._cache.clear()
