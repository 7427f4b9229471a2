"""Territory map API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class TerritoryFilters(BaseModel):
    show_customers: bool = True
    show_agents: bool = True
    only_with_location: bool = True
    show_inactive_customers: bool = False
    show_inactive_agents: bool = False
    agent_id: str = Field(default="all", description='Agent store key, or "all".')
    search: str = ""
    highlight_customer_id: Optional[str] = Field(
        default=None,
        description="Store key of a customer to flag as highlighted on the map.",
    )


class CustomerMarkerModel(BaseModel):
    id: str
    customer_id: str
    name: str
    location: str
    agent_id: str
    agent_name: str
    status: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    highlighted: bool = False


class AgentMarkerModel(BaseModel):
    id: str
    agent_id: str
    name: str
    email: str
    area_covered: str
    status: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    customers: int


class CoveragePolygonModel(BaseModel):
    agent_id: str
    agent_name: str
    customers: int
    coordinates: List[List[float]]


class BoundsModel(BaseModel):
    south: float
    west: float
    north: float
    east: float


class TerritoryMapResponse(BaseModel):
    customers: List[CustomerMarkerModel]
    agents: List[AgentMarkerModel]
    coverage: List[CoveragePolygonModel]
    bounds: Optional[BoundsModel] = None
    degraded: bool = False
    message: Optional[str] = None


class TerritoryModel(BaseModel):
    id: str
    name: str
    agent_id: str
    description: str


class TrackedAgentsResponse(BaseModel):
    agents: List[AgentMarkerModel]
    updates: int
