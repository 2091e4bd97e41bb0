

class HistMapError(Exception):
    """Base exception for all hist_map errors"""
    pass

class ConfigError(HistMapError):
    """Invalid or inconsistent global.json"""
    pass

class DataDecodeError(HistMapError):
    """
    Input data file doesn't have the expected shape
    e.g. a .geojson that is not a FeatureCollection, a hits file that is not a list
    """
    pass

class InvalidPatchError(HistMapError):
    """Options patch names an unknown section or field"""
    pass
