"""Territory records and the territory map."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..deps import DEGRADED_HEADER, get_document_store, get_scope
from ...data.repository import load_snapshot_or_empty
from ...data.store import AGENTS, CUSTOMERS, TERRITORIES, DocumentStore
from ...schemas.territories import TerritoryFilters, TerritoryMapResponse, TerritoryModel
from ...services.analytics.scope import scoped
from ...services.territories import build_territory_map, to_geojson

router = APIRouter(prefix="/territories", tags=["territories"])


def _scoped_filters(filters: TerritoryFilters, scope: Optional[str]) -> TerritoryFilters:
    if scope:
        return filters.model_copy(update={"agent_id": scope})
    return filters


@router.get("", response_model=List[TerritoryModel], status_code=status.HTTP_200_OK)
def get_territories(
    response: Response,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> List[TerritoryModel]:
    snapshot, error = load_snapshot_or_empty(store, (TERRITORIES,))
    if error:
        response.headers[DEGRADED_HEADER] = "true"
    return [
        TerritoryModel(id=item.id, name=item.name, agent_id=item.agent_id, description=item.description)
        for item in scoped(snapshot.territories, scope)
    ]


@router.get("/map", response_model=TerritoryMapResponse, status_code=status.HTTP_200_OK)
def get_territory_map(
    filters: TerritoryFilters = Depends(),
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> TerritoryMapResponse:
    snapshot, error = load_snapshot_or_empty(store, (AGENTS, CUSTOMERS))
    territory_map = build_territory_map(snapshot.agents, snapshot.customers, _scoped_filters(filters, scope))
    return TerritoryMapResponse(**territory_map, degraded=error is not None, message=error)


@router.get("/map.geojson", status_code=status.HTTP_200_OK)
def get_territory_geojson(
    response: Response,
    filters: TerritoryFilters = Depends(),
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> dict:
    snapshot, error = load_snapshot_or_empty(store, (AGENTS, CUSTOMERS))
    if error:
        response.headers[DEGRADED_HEADER] = "true"
    territory_map = build_territory_map(snapshot.agents, snapshot.customers, _scoped_filters(filters, scope))
    return to_geojson(territory_map)
