"""Aggregation helpers for dashboards and reports."""

from .performance import agent_performance, agent_performance_detail, performance_percentage
from .rankings import REBATE_RATE, customer_rebates, top_customers
from .revenue import MONTHS, monthly_revenue, product_sales_ranking, products_sold, total_revenue
from .summaries import dashboard_summary, entity_counts, reports_summary

__all__ = [
    "MONTHS",
    "REBATE_RATE",
    "agent_performance",
    "agent_performance_detail",
    "customer_rebates",
    "dashboard_summary",
    "entity_counts",
    "monthly_revenue",
    "performance_percentage",
    "product_sales_ranking",
    "products_sold",
    "reports_summary",
    "top_customers",
    "total_revenue",
]
