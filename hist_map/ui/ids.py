from __future__ import annotations

__all__ = ["IDs"]


class IDs:
    class Store:
        # Committed options; drives the map
        LIVE_OPTIONS = "live-options"
        # In-progress drawer edits
        STAGING_OPTIONS = "staging-options"

    class Control:
        # Drawer
        DRAWER = "filter-drawer"
        DRAWER_OPEN_BTN = "filter-drawer-open-btn"
        APPLY_BTN = "filter-apply-btn"
        RESET_BTN = "filter-reset-btn"
        DIRTY_BADGE = "filter-dirty-badge"

        # Hit filters
        STREET_INPUT = "street-input"
        HOUSE_NUMBER_INPUT = "house-number-input"
        ADDR_TYPE_SELECT = "addr-type-select"
        HIT_DATE_RANGE = "hit-date-range"
        HIT_TYPES_CHECKLIST = "hit-types-checklist"

        # Front-line filters
        FRONT_LINE_SHOW = "front-line-show"
        FRONT_LINE_DATE = "front-line-date"

        # Map + downloads
        MAP_GRAPH = "map-graph"
        DOWNLOAD_DATA = "download-data"
        DOWNLOAD_DATA_BTN = "download-data-btn"

        # Status bar
        STATUS_BAR = "status-bar"
