from datetime import date

import logging

import pytest

from backoffice.data.store import AGENTS, CUSTOMERS, ORDERS, InMemoryStore, RecordNotFoundError, StoreUnavailableError
from backoffice.schemas.agents import AgentCreate, AgentUpdate
from backoffice.schemas.customers import CustomerCreate
from backoffice.schemas.orders import OrderCreate, OrderItemIn, ProductCreate
from backoffice.services import management


def _store() -> InMemoryStore:
    return InMemoryStore(
        {
            AGENTS: {"a1": {"id": "a1", "agent_id": "BIGD-0007", "name": "Ana"}},
            CUSTOMERS: {
                "c1": {
                    "id": "c1",
                    "customer_id": "CUST-0003",
                    "name": "Sari-Sari Store",
                    "agent_id": "a1",
                    "total_spent": 1000,
                    "total_orders": 2,
                }
            },
        }
    )


def test_create_agent_allocates_code_and_defaults():
    store = _store()
    agent = management.create_agent(store, AgentCreate(name="Ben", email="ben@example.com"))

    assert agent.agent_id == "BIGD-0008"
    assert agent.status == "active"
    assert agent.sales_target == 50000
    assert agent.total_sales == 0
    assert agent.created_at and agent.created_at == agent.last_updated


def test_update_agent_refreshes_last_updated_and_keeps_other_fields():
    store = _store()
    agent = management.update_agent(store, "a1", AgentUpdate(status="suspended"))

    assert agent.status == "suspended"
    assert agent.name == "Ana"
    assert agent.last_updated is not None

    with pytest.raises(RecordNotFoundError):
        management.update_agent(store, "missing", AgentUpdate(name="X"))


def test_delete_agent_leaves_customers_in_place():
    store = _store()
    management.delete_agent(store, "a1")

    assert store.get(AGENTS, "a1") is None
    assert store.get(CUSTOMERS, "c1")["agent_id"] == "a1"


def test_create_customer_is_owned_by_scoped_agent(monkeypatch):
    monkeypatch.setattr(management, "geocode_address", lambda address: (14.55, 121.02))
    store = _store()
    customer = management.create_customer(
        store,
        CustomerCreate(name="Tindahan", agent_id="someone-else", location="Makati"),
        scope="a1",
    )

    assert customer.customer_id == "CUST-0004"
    assert customer.agent_id == "a1"
    assert customer.email == ""
    assert (customer.latitude, customer.longitude) == (14.55, 121.02)
    assert customer.total_spent == 0


def test_create_customer_keeps_given_coordinates(monkeypatch):
    def fail(address):
        raise AssertionError("geocoding should not run")

    monkeypatch.setattr(management, "geocode_address", fail)
    customer = management.create_customer(
        _store(),
        CustomerCreate(name="Tindahan", location="Makati", latitude=14.5, longitude=121.0),
    )
    assert customer.latitude == 14.5
    assert customer.agent_id == ""


def test_create_order_totals_items_and_rolls_up_customer():
    store = _store()
    order = management.create_order(
        store,
        OrderCreate(
            customer_id="c1",
            order_date=date(2024, 5, 2),
            items=[
                OrderItemIn(product_id="p1", product_name="Widget", quantity=3, unit_price=50),
                OrderItemIn(product_id="p2", quantity=1, unit_price=25.5),
            ],
        ),
        scope="a1",
    )

    assert order.total_amount == 175.5
    assert order.agent_id == "a1"
    assert order.customer_name == "Sari-Sari Store"
    assert order.order_id.startswith("ORD-") and len(order.order_id) == 10
    assert order.order_date == date(2024, 5, 2)

    customer = store.get(CUSTOMERS, "c1")
    assert customer["total_spent"] == 1175.5
    assert customer["total_orders"] == 3
    assert len(store.get_all(ORDERS)) == 1


def test_admin_orders_are_attributed_to_the_customers_agent():
    store = _store()
    order = management.create_order(
        store,
        OrderCreate(customer_id="c1", items=[OrderItemIn(product_id="p1", quantity=10, unit_price=100)]),
    )

    assert order.agent_id == "a1"
    assert store.get(ORDERS, order.id)["agent_id"] == "a1"
    assert store.get(CUSTOMERS, "c1")["total_spent"] == 2000


def test_failed_roll_up_is_logged_and_raised(monkeypatch, caplog):
    store = _store()
    original_update = store.update

    def failing_update(collection, key, changes):
        if collection == CUSTOMERS:
            raise StoreUnavailableError("write timed out")
        return original_update(collection, key, changes)

    monkeypatch.setattr(store, "update", failing_update)
    with caplog.at_level(logging.ERROR, logger="backoffice.services.management"):
        with pytest.raises(StoreUnavailableError):
            management.create_order(
                store,
                OrderCreate(customer_id="c1", items=[OrderItemIn(product_id="p1", unit_price=40)]),
                scope="a1",
            )

    assert len(store.get_all(ORDERS)) == 1
    assert store.get(CUSTOMERS, "c1")["total_spent"] == 1000
    assert "customer c1 totals were not updated" in caplog.text


def test_agents_cannot_order_for_other_agents_customers():
    with pytest.raises(RecordNotFoundError):
        management.create_order(
            _store(),
            OrderCreate(customer_id="c1", items=[OrderItemIn(product_id="p1", unit_price=1)]),
            scope="a2",
        )


def test_order_requires_items():
    with pytest.raises(ValueError):
        OrderCreate(customer_id="c1", items=[])


def test_update_order_status_and_create_product():
    store = _store()
    order = management.create_order(
        store,
        OrderCreate(customer_id="c1", items=[OrderItemIn(product_id="p1", unit_price=10)]),
    )
    updated = management.update_order_status(store, order.id, "completed")
    assert updated.status == "completed"
    assert updated.total_amount == 10

    product = management.create_product(store, ProductCreate(name="Widget", price=50, sku="W-1"))
    assert product.id and product.name == "Widget"
