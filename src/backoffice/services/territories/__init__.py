"""Territory viewer services."""

from .geojson import to_geojson
from .mapping import agent_marker, build_territory_map, coverage_polygon

__all__ = ["agent_marker", "build_territory_map", "coverage_polygon", "to_geojson"]
