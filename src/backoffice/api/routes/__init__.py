"""Route group exports."""

from . import agents, customers, dashboard, health, orders, products, reports, territories, tracking

__all__ = [
    "agents",
    "customers",
    "dashboard",
    "health",
    "orders",
    "products",
    "reports",
    "territories",
    "tracking",
]
