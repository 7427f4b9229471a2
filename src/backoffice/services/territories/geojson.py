"""GeoJSON export of territory map data."""

from __future__ import annotations

from typing import Any, Dict, List


def generate_agent_color(index: int) -> str:
    """Generate distinct colors for agent coverage areas."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
    ]
    return colors[index % len(colors)]


def _point_feature(marker: Dict[str, Any], kind: str) -> Dict[str, Any] | None:
    lat = marker.get("latitude")
    lon = marker.get("longitude")
    if lat is None or lon is None:
        return None
    properties = {key: value for key, value in marker.items() if key not in {"latitude", "longitude"}}
    properties["kind"] = kind
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": properties,
    }


def to_geojson(territory_map: Dict[str, Any]) -> Dict[str, Any]:
    """Convert ``build_territory_map`` output to a FeatureCollection.

    GeoJSON positions are ``[lon, lat]``; coverage rings arrive as ``[lat, lon]``.
    """
    features: List[Dict[str, Any]] = []

    for marker in territory_map.get("customers", []):
        feature = _point_feature(marker, "customer")
        if feature:
            features.append(feature)

    for marker in territory_map.get("agents", []):
        feature = _point_feature(marker, "agent")
        if feature:
            features.append(feature)

    for idx, area in enumerate(territory_map.get("coverage", [])):
        ring = [[lon, lat] for lat, lon in area.get("coordinates", [])]
        if len(ring) < 4:
            continue
        if ring[0] != ring[-1]:
            ring.append(ring[0])
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Polygon", "coordinates": [ring]},
                "properties": {
                    "kind": "coverage",
                    "agent_id": area.get("agent_id"),
                    "agent_name": area.get("agent_name"),
                    "customers": area.get("customers", 0),
                    "fill": generate_agent_color(idx),
                    "fill-opacity": 0.33,
                },
            }
        )

    return {"type": "FeatureCollection", "features": features}
