"""Dashboard and report payloads assembled from a snapshot."""

from __future__ import annotations

from typing import Optional

from .performance import agent_performance
from .rankings import customer_rebates, top_customers
from .revenue import monthly_revenue, product_sales_ranking, products_sold, total_revenue
from .scope import normalize_scope, scoped
from ...config import settings
from ...data.repository import Snapshot


def entity_counts(snapshot: Snapshot, scope: Optional[str] = None) -> dict:
    agent_scope = normalize_scope(scope)
    agents = snapshot.agents
    if agent_scope is not None:
        agents = tuple(agent for agent in agents if agent.id == agent_scope)
    return {
        "agents": len(agents),
        "customers": len(scoped(snapshot.customers, agent_scope)),
        "orders": len(scoped(snapshot.orders, agent_scope)),
        "products": len(snapshot.products),
        "territories": len(scoped(snapshot.territories, agent_scope)),
    }


def dashboard_summary(snapshot: Snapshot, scope: Optional[str] = None) -> dict:
    counts = entity_counts(snapshot, scope)
    return {
        "scope": normalize_scope(scope),
        "totalRevenue": total_revenue(snapshot.orders, scope),
        "totalOrders": counts["orders"],
        "totalCustomers": counts["customers"],
        "totalProductsSold": products_sold(snapshot.orders, scope),
        "counts": counts,
        "monthlyRevenue": monthly_revenue(snapshot.orders, scope),
        "topCustomers": top_customers(snapshot.customers, scope, limit=settings.top_n),
    }


def reports_summary(snapshot: Snapshot, scope: Optional[str] = None) -> dict:
    return {
        "scope": normalize_scope(scope),
        "agentPerformance": agent_performance(snapshot.agents, snapshot.orders, scope),
        "customerRebates": customer_rebates(snapshot.customers, scope, limit=settings.top_n),
        "productSales": product_sales_ranking(
            snapshot.orders,
            snapshot.products,
            scope,
            limit=settings.top_n,
        ),
    }
