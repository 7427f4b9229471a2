"""Agent sales performance against target."""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Iterable, Optional

from .revenue import MONTHS
from .scope import normalize_scope
from ...config import settings
from ...models.domain import Agent, Customer, Order

UNKNOWN_AGENT = "Unknown Agent"


def performance_percentage(sales: float, target: float) -> int:
    """Share of target reached, rounded half-up and capped at 100."""

    if target <= 0:
        return 100 if sales > 0 else 0
    ratio = min(100.0, sales / target * 100)
    return int(math.floor(ratio + 0.5))


def _target_of(agent: Agent) -> float:
    return agent.sales_target or settings.default_sales_target


def agent_performance(
    agents: Optional[Iterable[Agent]],
    orders: Optional[Iterable[Order]],
    scope: Optional[str] = None,
) -> list[dict]:
    """Sales per agent paired with the agent's target.

    ``metTarget`` compares the raw sales figure, so an agent far above
    target and one exactly on it both show 100%.
    """

    sales: dict[str, float] = defaultdict(float)
    for order in orders or ():
        if order.agent_id:
            sales[order.agent_id] += order.total_amount

    agent_scope = normalize_scope(scope)
    rows: list[dict] = []
    for agent in agents or ():
        if agent_scope is not None and agent.id != agent_scope:
            continue
        agent_sales = sales.get(agent.id, 0)
        target = _target_of(agent)
        rows.append(
            {
                "id": agent.id,
                "agent_id": agent.agent_id,
                "name": agent.name or UNKNOWN_AGENT,
                "sales": agent_sales,
                "target": target,
                "performancePercentage": performance_percentage(agent_sales, target),
                "metTarget": agent_sales >= target,
            }
        )
    return rows


def agent_performance_detail(
    agent: Agent,
    orders: Optional[Iterable[Order]],
    customers: Optional[Iterable[Customer]],
) -> dict:
    """Everything the agent detail page shows: monthly sales and totals."""

    monthly = [0] * len(MONTHS)
    total_sales: float = 0
    order_count = 0
    for order in orders or ():
        if order.agent_id != agent.id:
            continue
        total_sales += order.total_amount
        order_count += 1
        if order.order_date is not None:
            monthly[order.order_date.month - 1] += order.total_amount

    customer_count = sum(1 for customer in customers or () if customer.agent_id == agent.id)
    target = _target_of(agent)
    return {
        "id": agent.id,
        "agent_id": agent.agent_id,
        "name": agent.name or UNKNOWN_AGENT,
        "monthlySales": [{"name": month, "sales": value} for month, value in zip(MONTHS, monthly)],
        "totalSales": total_sales,
        "salesTarget": target,
        "performancePercentage": performance_percentage(total_sales, target),
        "metTarget": total_sales >= target,
        "customerCount": customer_count,
        "orderCount": order_count,
    }
