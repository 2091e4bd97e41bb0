"""
Config package for hist_map.

Responsible for:
- the config model (GlobalConfig)
- config and data I/O helpers (load_global_config / load_data)
- decoding untrusted hit records
"""

from .model import GlobalConfig
from .io import load_global_config, load_data, load_hits, load_front_lines
