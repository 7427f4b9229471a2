"""Territory map data: customer and agent markers plus agent coverage areas."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Optional

from shapely.geometry import MultiPoint

from ..analytics.performance import UNKNOWN_AGENT
from ..directory import resolve_agent_name
from ...models.domain import Agent, Customer
from ...schemas.territories import TerritoryFilters

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = "Unknown Customer"
MISSING_AGENT_CODE = "BIGD-?????"

# ~1 km; keeps single-customer and collinear coverage areas visible
_SPARSE_BUFFER_DEGREES = 0.01
# ~500 m; customers sit inside the hull rather than on its edge
_HULL_BUFFER_DEGREES = 0.005


def _search_hit(search: str, *values: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    return any(needle in (value or "").lower() for value in values)


def _visible_customers(customers: Iterable[Customer], filters: TerritoryFilters) -> list[Customer]:
    visible: list[Customer] = []
    for customer in customers:
        if filters.only_with_location and not customer.has_location:
            continue
        if not filters.show_inactive_customers and customer.status != "active":
            continue
        if filters.agent_id != "all" and customer.agent_id != filters.agent_id:
            continue
        if not _search_hit(filters.search, customer.name, customer.customer_id):
            continue
        visible.append(customer)
    return visible


def _visible_agents(agents: Iterable[Agent], filters: TerritoryFilters) -> list[Agent]:
    visible: list[Agent] = []
    for agent in agents:
        if filters.only_with_location and not agent.has_location:
            continue
        if not filters.show_inactive_agents and agent.status != "active":
            continue
        if filters.agent_id != "all" and agent.id != filters.agent_id:
            continue
        if not _search_hit(filters.search, agent.name, agent.agent_id):
            continue
        visible.append(agent)
    return visible


def coverage_polygon(points: list[tuple[float, float]]) -> Optional[list[list[float]]]:
    """Closed ring of ``[lat, lon]`` pairs around the given ``(lat, lon)`` points."""

    distinct = sorted(set(points))
    if not distinct:
        return None
    geometry = MultiPoint([(lon, lat) for lat, lon in distinct]).convex_hull
    if geometry.geom_type == "Polygon":
        area = geometry.buffer(_HULL_BUFFER_DEGREES)
    else:
        area = geometry.buffer(_SPARSE_BUFFER_DEGREES)
    if area.is_empty or area.geom_type != "Polygon":
        return None
    return [[round(y, 6), round(x, 6)] for x, y in area.exterior.coords]


def agent_marker(agent: Agent, customers: int = 0) -> dict:
    return {
        "id": agent.id,
        "agent_id": agent.agent_id or MISSING_AGENT_CODE,
        "name": agent.name or UNKNOWN_AGENT,
        "email": agent.email,
        "area_covered": agent.area_covered,
        "status": agent.status,
        "latitude": agent.latitude,
        "longitude": agent.longitude,
        "customers": customers,
    }


def _bounds(points: list[tuple[float, float]]) -> Optional[dict]:
    if not points:
        return None
    lats = [lat for lat, _ in points]
    lons = [lon for _, lon in points]
    return {"south": min(lats), "west": min(lons), "north": max(lats), "east": max(lons)}


def build_territory_map(
    agents: Optional[Iterable[Agent]],
    customers: Optional[Iterable[Customer]],
    filters: Optional[TerritoryFilters] = None,
) -> dict:
    filters = filters or TerritoryFilters()
    all_agents = list(agents or ())
    agent_names = {agent.id: agent.name for agent in all_agents}

    customers_shown = _visible_customers(customers or (), filters) if filters.show_customers else []
    agents_shown = _visible_agents(all_agents, filters) if filters.show_agents else []

    customer_counts: dict[str, int] = defaultdict(int)
    points_by_agent: dict[str, list[tuple[float, float]]] = defaultdict(list)
    located: list[tuple[float, float]] = []

    customer_markers: list[dict] = []
    for customer in customers_shown:
        if customer.agent_id:
            customer_counts[customer.agent_id] += 1
        if customer.has_location:
            point = (customer.latitude, customer.longitude)
            located.append(point)
            if customer.agent_id in agent_names:
                points_by_agent[customer.agent_id].append(point)
        customer_markers.append(
            {
                "id": customer.id,
                "customer_id": customer.customer_id,
                "name": customer.name or UNKNOWN_CUSTOMER,
                "location": customer.location,
                "agent_id": customer.agent_id,
                "agent_name": resolve_agent_name(customer.agent_id, agent_names),
                "status": customer.status,
                "latitude": customer.latitude,
                "longitude": customer.longitude,
                "highlighted": bool(filters.highlight_customer_id) and customer.id == filters.highlight_customer_id,
            }
        )

    agent_markers: list[dict] = []
    for agent in agents_shown:
        if agent.has_location:
            located.append((agent.latitude, agent.longitude))
        agent_markers.append(agent_marker(agent, customer_counts.get(agent.id, 0)))

    coverage: list[dict] = []
    for agent_key, points in points_by_agent.items():
        ring = coverage_polygon(points)
        if ring is None:
            logger.debug(f"No coverage polygon for agent {agent_key}")
            continue
        coverage.append(
            {
                "agent_id": agent_key,
                "agent_name": agent_names.get(agent_key) or UNKNOWN_AGENT,
                "customers": len(points),
                "coordinates": ring,
            }
        )

    return {
        "customers": customer_markers,
        "agents": agent_markers,
        "coverage": coverage,
        "bounds": _bounds(located),
    }
