"""Order listing, creation and status endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..deps import DEGRADED_HEADER, get_document_store, get_scope, store_errors
from ...data.repository import load_snapshot_or_empty
from ...data.store import ORDERS, DocumentStore, RecordNotFoundError
from ...models.domain import Order
from ...schemas.orders import OrderCreate, OrderModel, OrderStatusUpdate
from ...services import management
from ...services.directory import list_orders, order_row

router = APIRouter(prefix="/orders", tags=["orders"])


def _owned_order(store: DocumentStore, order_key: str, scope: Optional[str]) -> Order:
    order = management.get_order(store, order_key)
    if scope and order.agent_id != scope:
        raise RecordNotFoundError(ORDERS, order_key)
    return order


@router.get("", response_model=List[OrderModel], status_code=status.HTTP_200_OK)
def get_orders(
    response: Response,
    search: Optional[str] = Query(default=None, description="Case-insensitive match on order code or customer name"),
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> List[OrderModel]:
    snapshot, error = load_snapshot_or_empty(store, (ORDERS,))
    if error:
        response.headers[DEGRADED_HEADER] = "true"
    return [OrderModel(**row) for row in list_orders(snapshot.orders, scope, search)]


@router.post("", response_model=OrderModel, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> OrderModel:
    with store_errors():
        order = management.create_order(store, payload, scope)
    return OrderModel(**order_row(order))


@router.get("/{order_key}", response_model=OrderModel, status_code=status.HTTP_200_OK)
def get_order(
    order_key: str,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> OrderModel:
    with store_errors():
        order = _owned_order(store, order_key, scope)
    return OrderModel(**order_row(order))


@router.patch("/{order_key}/status", response_model=OrderModel, status_code=status.HTTP_200_OK)
def update_order_status(
    order_key: str,
    payload: OrderStatusUpdate,
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> OrderModel:
    with store_errors():
        _owned_order(store, order_key, scope)
        order = management.update_order_status(store, order_key, payload.status)
    return OrderModel(**order_row(order))
