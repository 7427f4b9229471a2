"""Agent directory, detail and management endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..deps import DEGRADED_HEADER, ensure_own_agent, get_document_store, get_scope, require_admin, store_errors
from ...data.repository import load_snapshot, load_snapshot_or_empty
from ...data.store import AGENTS, CUSTOMERS, ORDERS, DocumentStore
from ...schemas.agents import (
    AgentCreate,
    AgentModel,
    AgentPerformanceDetailModel,
    AgentUpdate,
    NextCodeModel,
)
from ...schemas.customers import CustomerModel
from ...services import management
from ...services.analytics import agent_performance_detail
from ...services.directory import agent_customers, agent_row, list_agents
from ...services.identifiers import next_agent_code

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("", response_model=List[AgentModel], status_code=status.HTTP_200_OK)
def get_agents(
    response: Response,
    search: Optional[str] = Query(default=None, description="Case-insensitive match on name, email, code or area"),
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> List[AgentModel]:
    snapshot, error = load_snapshot_or_empty(store, (AGENTS,))
    if error:
        response.headers[DEGRADED_HEADER] = "true"
    agents = [agent for agent in snapshot.agents if not scope or agent.id == scope]
    return [AgentModel(**row) for row in list_agents(agents, search)]


@router.get(
    "/next-code",
    response_model=NextCodeModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_admin)],
)
def preview_next_agent_code(store: DocumentStore = Depends(get_document_store)) -> NextCodeModel:
    """Code the next created agent would receive, if nobody else creates one first."""
    with store_errors():
        return NextCodeModel(code=next_agent_code(store.get_all(AGENTS)))


@router.post(
    "",
    response_model=AgentModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_agent(payload: AgentCreate, store: DocumentStore = Depends(get_document_store)) -> AgentModel:
    with store_errors():
        agent = management.create_agent(store, payload)
    return AgentModel(**agent_row(agent))


@router.get("/{agent_key}", response_model=AgentModel, status_code=status.HTTP_200_OK)
def get_agent(
    agent_key: str,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> AgentModel:
    ensure_own_agent(agent_key, scope)
    with store_errors():
        agent = management.get_agent(store, agent_key)
    return AgentModel(**agent_row(agent))


@router.patch(
    "/{agent_key}",
    response_model=AgentModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_admin)],
)
def update_agent(
    agent_key: str,
    payload: AgentUpdate,
    store: DocumentStore = Depends(get_document_store),
) -> AgentModel:
    with store_errors():
        agent = management.update_agent(store, agent_key, payload)
    return AgentModel(**agent_row(agent))


@router.delete(
    "/{agent_key}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_agent(agent_key: str, store: DocumentStore = Depends(get_document_store)) -> Response:
    with store_errors():
        management.delete_agent(store, agent_key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{agent_key}/performance", response_model=AgentPerformanceDetailModel, status_code=status.HTTP_200_OK)
def get_agent_performance(
    agent_key: str,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> AgentPerformanceDetailModel:
    ensure_own_agent(agent_key, scope)
    with store_errors():
        snapshot = load_snapshot(store, (AGENTS, CUSTOMERS, ORDERS))
    agent = next((item for item in snapshot.agents if item.id == agent_key), None)
    if agent is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Agent '{agent_key}' not found")
    return AgentPerformanceDetailModel(**agent_performance_detail(agent, snapshot.orders, snapshot.customers))


@router.get("/{agent_key}/customers", response_model=List[CustomerModel], status_code=status.HTTP_200_OK)
def get_agent_customers(
    agent_key: str,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> List[CustomerModel]:
    ensure_own_agent(agent_key, scope)
    with store_errors():
        snapshot = load_snapshot(store, (AGENTS, CUSTOMERS))
    return [CustomerModel(**row) for row in agent_customers(snapshot.customers, snapshot.agents, agent_key)]
