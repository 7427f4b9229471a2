"""Create/update/delete operations behind the admin and agent forms."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from .geocoding import geocode_address
from .identifiers import allocate_and_create, next_order_code
from ..config import settings
from ..data.records import agent_from_record, customer_from_record, order_from_record, product_from_record
from ..data.store import AGENTS, CUSTOMERS, ORDERS, PRODUCTS, DocumentStore, RecordNotFoundError, StoreUnavailableError
from ..models.domain import Agent, Customer, Order, Product
from ..schemas.agents import AgentCreate, AgentUpdate
from ..schemas.customers import CustomerCreate, CustomerUpdate
from ..schemas.orders import OrderCreate, ProductCreate

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _require(store: DocumentStore, collection: str, key: str) -> dict[str, Any]:
    record = store.get(collection, key)
    if record is None:
        raise RecordNotFoundError(collection, key)
    return record


# Agents

def get_agent(store: DocumentStore, key: str) -> Agent:
    return agent_from_record(key, _require(store, AGENTS, key))


def create_agent(store: DocumentStore, payload: AgentCreate) -> Agent:
    timestamp = now_iso()
    record = payload.model_dump()
    record.update(
        {
            "created_at": timestamp,
            "last_updated": timestamp,
            "total_sales": 0,
            "customers_count": 0,
        }
    )
    created = allocate_and_create(
        store,
        AGENTS,
        record,
        prefix=settings.agent_code_prefix,
        field="agent_id",
    )
    logger.info(f"Created agent {created['agent_id']} ({created['id']})")
    return agent_from_record(created["id"], created)


def update_agent(store: DocumentStore, key: str, payload: AgentUpdate) -> Agent:
    changes = payload.model_dump(exclude_unset=True)
    changes["last_updated"] = now_iso()
    updated = store.update(AGENTS, key, changes)
    return agent_from_record(key, updated)


def delete_agent(store: DocumentStore, key: str) -> str:
    # customers keep their agent reference; list views show "Unknown Agent"
    return store.delete(AGENTS, key)


# Customers

def get_customer(store: DocumentStore, key: str) -> Customer:
    return customer_from_record(key, _require(store, CUSTOMERS, key))


def create_customer(store: DocumentStore, payload: CustomerCreate, scope: Optional[str] = None) -> Customer:
    """Create a customer; agent-scoped callers always own the new record."""

    record = payload.model_dump()
    if scope:
        record["agent_id"] = scope
    if record.get("email") is None:
        record["email"] = ""
    if record.get("location") and (record.get("latitude") is None or record.get("longitude") is None):
        coordinates = geocode_address(record["location"])
        if coordinates:
            record["latitude"], record["longitude"] = coordinates
    record.update({"created_at": now_iso(), "total_spent": 0, "total_orders": 0})

    created = allocate_and_create(
        store,
        CUSTOMERS,
        record,
        prefix=settings.customer_code_prefix,
        field="customer_id",
    )
    logger.info(f"Created customer {created['customer_id']} ({created['id']})")
    return customer_from_record(created["id"], created)


def update_customer(store: DocumentStore, key: str, payload: CustomerUpdate) -> Customer:
    changes = payload.model_dump(exclude_unset=True)
    return customer_from_record(key, store.update(CUSTOMERS, key, changes))


def delete_customer(store: DocumentStore, key: str) -> str:
    return store.delete(CUSTOMERS, key)


# Orders

def get_order(store: DocumentStore, key: str) -> Order:
    return order_from_record(key, _require(store, ORDERS, key))


def _roll_up_order(store: DocumentStore, customer_key: str, order: dict[str, Any], total_amount: float) -> None:
    """Add a freshly written order to the customer's running totals.

    Not transactional: the totals are re-read right before the write, but two
    concurrent orders for one customer can still lose an increment, and a
    failed write leaves the order in place with stale totals.
    """

    try:
        current = customer_from_record(customer_key, _require(store, CUSTOMERS, customer_key))
        store.update(
            CUSTOMERS,
            customer_key,
            {
                "total_spent": current.total_spent + total_amount,
                "total_orders": current.total_orders + 1,
            },
        )
    except (StoreUnavailableError, RecordNotFoundError):
        logger.error(
            f"Order {order.get('order_id')} ({order.get('id')}) was saved but customer {customer_key} totals "
            f"were not updated by {total_amount}"
        )
        raise


def create_order(store: DocumentStore, payload: OrderCreate, scope: Optional[str] = None) -> Order:
    """Persist an order and roll its total into the customer's running totals.

    ``total_amount`` is fixed here from the line items and never recomputed.
    """

    customer = _require(store, CUSTOMERS, payload.customer_id)
    if scope and (customer.get("agent_id") or "") != scope:
        # agents can only order for their own customers
        raise RecordNotFoundError(CUSTOMERS, payload.customer_id)
    items = [item.model_dump() for item in payload.items]
    total_amount = sum(item["quantity"] * item["unit_price"] for item in items)
    timestamp = now_iso()

    record = {
        "order_id": next_order_code(),
        "customer_id": payload.customer_id,
        "customer_name": customer.get("name") or "",
        "agent_id": scope or (customer.get("agent_id") or ""),
        "order_date": payload.order_date.isoformat(),
        "status": payload.status,
        "items": items,
        "total_amount": total_amount,
        "created_at": timestamp,
    }
    created = store.create(ORDERS, record)

    _roll_up_order(store, payload.customer_id, created, total_amount)
    logger.info(f"Created order {created['order_id']} for customer {payload.customer_id}")
    return order_from_record(created["id"], created)


def update_order_status(store: DocumentStore, key: str, status: str) -> Order:
    return order_from_record(key, store.update(ORDERS, key, {"status": status}))


# Products

def create_product(store: DocumentStore, payload: ProductCreate) -> Product:
    created = store.create(PRODUCTS, payload.model_dump())
    return product_from_record(created["id"], created)
