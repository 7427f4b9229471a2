from datetime import date

from backoffice.models.domain import Agent, Customer, Order
from backoffice.services.directory import (
    agent_customers,
    customer_orders,
    list_agents,
    list_customers,
    list_orders,
    resolve_agent_name,
)


def _agent(key: str, name: str, email: str = "") -> Agent:
    return Agent(
        id=key,
        agent_id=f"BIGD-{key}",
        name=name,
        email=email,
        contact="",
        area_covered="Makati",
        status="active",
        sales_target=50000,
        customers_count=0,
        total_sales=0,
    )


def _customer(key: str, agent: str = "", name: str = "") -> Customer:
    return Customer(
        id=key,
        customer_id=f"CUST-{key}",
        name=name or f"Customer {key}",
        email="",
        contact="",
        location="Quezon City",
        agent_id=agent,
        status="active",
        total_spent=0,
        total_orders=0,
    )


def _order(key: str, order_date: date | None, customer: str = "c1", agent: str = "") -> Order:
    return Order(
        id=key,
        order_id=f"ORD-{key}",
        customer_id=customer,
        customer_name=f"Customer {customer}",
        agent_id=agent,
        order_date=order_date,
        total_amount=10,
        status="pending",
    )


def test_agent_name_sentinels():
    names = {"a1": "Ana", "a2": ""}
    assert resolve_agent_name("", names) == "Not Assigned"
    assert resolve_agent_name("ghost", names) == "Unknown Agent"
    assert resolve_agent_name("a2", names) == "Unknown Agent"
    assert resolve_agent_name("a1", names) == "Ana"


def test_list_customers_resolves_agent_names_and_scope():
    agents = [_agent("a1", "Ana")]
    customers = [_customer("c1", "a1"), _customer("c2", "deleted"), _customer("c3")]

    rows = {row["id"]: row["agent_name"] for row in list_customers(customers, agents)}
    assert rows == {"c1": "Ana", "c2": "Unknown Agent", "c3": "Not Assigned"}

    scoped = list_customers(customers, agents, scope="a1")
    assert [row["id"] for row in scoped] == ["c1"]
    assert agent_customers(customers, agents, "a1") == scoped


def test_search_is_case_insensitive():
    agents = [_agent("a1", "Ana Cruz", "ana@example.com"), _agent("a2", "Ben Diaz")]
    assert [row["id"] for row in list_agents(agents, "CRUZ")] == ["a1"]
    assert [row["id"] for row in list_agents(agents, "bigd-a2")] == ["a2"]
    assert len(list_agents(agents, "  ")) == 2


def test_orders_newest_first_with_undated_last():
    orders = [
        _order("1", date(2024, 1, 1)),
        _order("2", None),
        _order("3", date(2024, 6, 1), customer="c2"),
    ]
    assert [row["id"] for row in list_orders(orders)] == ["3", "1", "2"]
    assert list_orders(orders)[0]["order_date"] == "2024-06-01"
    assert [row["id"] for row in customer_orders(orders, "c1")] == ["1", "2"]
