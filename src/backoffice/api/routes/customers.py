"""Customer directory and management endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..deps import DEGRADED_HEADER, get_document_store, get_scope, store_errors
from ...data.repository import load_snapshot, load_snapshot_or_empty
from ...data.store import AGENTS, CUSTOMERS, ORDERS, DocumentStore, RecordNotFoundError
from ...models.domain import Customer
from ...schemas.agents import NextCodeModel
from ...schemas.customers import CustomerCreate, CustomerModel, CustomerUpdate
from ...schemas.orders import OrderModel
from ...services import management
from ...services.directory import customer_orders, customer_row, list_customers
from ...services.identifiers import next_customer_code

router = APIRouter(prefix="/customers", tags=["customers"])


def _owned_customer(store: DocumentStore, customer_key: str, scope: Optional[str]) -> Customer:
    customer = management.get_customer(store, customer_key)
    if scope and customer.agent_id != scope:
        raise RecordNotFoundError(CUSTOMERS, customer_key)
    return customer


def _to_model(store: DocumentStore, customer: Customer) -> CustomerModel:
    agent_names: dict[str, str] = {}
    if customer.agent_id:
        agent = store.get(AGENTS, customer.agent_id)
        if agent is not None:
            agent_names[customer.agent_id] = str(agent.get("name") or "")
    return CustomerModel(**customer_row(customer, agent_names))


@router.get("", response_model=List[CustomerModel], status_code=status.HTTP_200_OK)
def get_customers(
    response: Response,
    search: Optional[str] = Query(default=None, description="Case-insensitive match on name, email, code or location"),
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> List[CustomerModel]:
    snapshot, error = load_snapshot_or_empty(store, (AGENTS, CUSTOMERS))
    if error:
        response.headers[DEGRADED_HEADER] = "true"
    return [CustomerModel(**row) for row in list_customers(snapshot.customers, snapshot.agents, scope, search)]


@router.get("/next-code", response_model=NextCodeModel, status_code=status.HTTP_200_OK)
def preview_next_customer_code(store: DocumentStore = Depends(get_document_store)) -> NextCodeModel:
    with store_errors():
        return NextCodeModel(code=next_customer_code(store.get_all(CUSTOMERS)))


@router.post("", response_model=CustomerModel, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> CustomerModel:
    with store_errors():
        customer = management.create_customer(store, payload, scope)
        return _to_model(store, customer)


@router.get("/{customer_key}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def get_customer(
    customer_key: str,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> CustomerModel:
    with store_errors():
        return _to_model(store, _owned_customer(store, customer_key, scope))


@router.patch("/{customer_key}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def update_customer(
    customer_key: str,
    payload: CustomerUpdate,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> CustomerModel:
    with store_errors():
        _owned_customer(store, customer_key, scope)
        if scope:
            # agents cannot hand their customers to someone else
            payload = CustomerUpdate(**payload.model_dump(exclude_unset=True, exclude={"agent_id"}))
        customer = management.update_customer(store, customer_key, payload)
        return _to_model(store, customer)


@router.delete("/{customer_key}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_key: str,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> Response:
    with store_errors():
        _owned_customer(store, customer_key, scope)
        management.delete_customer(store, customer_key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{customer_key}/orders", response_model=List[OrderModel], status_code=status.HTTP_200_OK)
def get_customer_orders(
    customer_key: str,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> List[OrderModel]:
    with store_errors():
        _owned_customer(store, customer_key, scope)
        snapshot = load_snapshot(store, (ORDERS,))
    return [OrderModel(**row) for row in customer_orders(snapshot.orders, customer_key)]
