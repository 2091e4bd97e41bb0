"""
Historical strike map: artillery/incendiary hits and dated front lines,
narrowed through a filter drawer with explicit apply.
"""

__version__ = "0.1.0"
