"""List views over agents, customers and orders."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from .analytics.performance import UNKNOWN_AGENT
from .analytics.scope import scoped
from ..models.domain import Agent, Customer, Order

NOT_ASSIGNED = "Not Assigned"


def resolve_agent_name(agent_key: str, agent_names: dict[str, str]) -> str:
    """Display name for a customer's agent reference."""

    if not agent_key:
        return NOT_ASSIGNED
    return agent_names.get(agent_key) or UNKNOWN_AGENT


def _matches(search: Optional[str], *values: Optional[str]) -> bool:
    if not search or not search.strip():
        return True
    needle = search.strip().lower()
    return any(needle in value.lower() for value in values if value)


def agent_row(agent: Agent) -> dict:
    return {
        "id": agent.id,
        "agent_id": agent.agent_id,
        "name": agent.name or "Unknown",
        "email": agent.email,
        "contact": agent.contact,
        "area_covered": agent.area_covered,
        "status": agent.status,
        "sales_target": agent.sales_target,
        "customers_count": agent.customers_count,
        "total_sales": agent.total_sales,
        "latitude": agent.latitude,
        "longitude": agent.longitude,
    }


def customer_row(customer: Customer, agent_names: dict[str, str]) -> dict:
    return {
        "id": customer.id,
        "customer_id": customer.customer_id,
        "name": customer.name or "Unknown",
        "email": customer.email,
        "contact": customer.contact,
        "location": customer.location,
        "agent_id": customer.agent_id,
        "agent_name": resolve_agent_name(customer.agent_id, agent_names),
        "status": customer.status,
        "total_spent": customer.total_spent,
        "total_orders": customer.total_orders,
        "latitude": customer.latitude,
        "longitude": customer.longitude,
    }


def order_row(order: Order) -> dict:
    return {
        "id": order.id,
        "order_id": order.order_id,
        "customer_id": order.customer_id,
        "customer_name": order.customer_name,
        "agent_id": order.agent_id,
        "order_date": order.order_date.isoformat() if order.order_date else None,
        "total_amount": order.total_amount,
        "status": order.status,
        "items": [
            {
                "product_id": item.product_id,
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "subtotal": item.subtotal,
            }
            for item in order.items
        ],
    }


def list_agents(agents: Optional[Iterable[Agent]], search: Optional[str] = None) -> list[dict]:
    return [
        agent_row(agent)
        for agent in agents or ()
        if _matches(search, agent.name, agent.email, agent.agent_id, agent.area_covered)
    ]


def list_customers(
    customers: Optional[Iterable[Customer]],
    agents: Optional[Iterable[Agent]],
    scope: Optional[str] = None,
    search: Optional[str] = None,
) -> list[dict]:
    agent_names = {agent.id: agent.name for agent in agents or ()}
    return [
        customer_row(customer, agent_names)
        for customer in scoped(customers, scope)
        if _matches(search, customer.name, customer.email, customer.customer_id, customer.location)
    ]


def list_orders(
    orders: Optional[Iterable[Order]],
    scope: Optional[str] = None,
    search: Optional[str] = None,
) -> list[dict]:
    """Orders newest first; undated orders go last."""

    matching = [
        order
        for order in scoped(orders, scope)
        if _matches(search, order.order_id, order.customer_name)
    ]
    matching.sort(key=lambda order: order.order_date or date.min, reverse=True)
    return [order_row(order) for order in matching]


def customer_orders(orders: Optional[Iterable[Order]], customer_key: str) -> list[dict]:
    return list_orders(order for order in orders or () if order.customer_id == customer_key)


def agent_customers(
    customers: Optional[Iterable[Customer]],
    agents: Optional[Iterable[Agent]],
    agent_key: str,
) -> list[dict]:
    return list_customers(customers, agents, scope=agent_key)
