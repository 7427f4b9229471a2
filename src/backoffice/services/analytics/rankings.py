"""Customer rankings: top spenders and rebates."""

from __future__ import annotations

from typing import Iterable, Optional

from .scope import scoped
from ...models.domain import Customer

REBATE_RATE = 0.10

UNKNOWN_CUSTOMER = "Unknown Customer"


def top_customers(
    customers: Optional[Iterable[Customer]],
    scope: Optional[str] = None,
    limit: int = 5,
) -> list[dict]:
    """Customers with the highest ``total_spent``; ties keep snapshot order."""

    ranked = sorted(scoped(customers, scope), key=lambda customer: customer.total_spent, reverse=True)
    return [
        {
            "id": customer.id,
            "customer_id": customer.customer_id,
            "name": customer.name,
            "contact": customer.contact,
            "email": customer.email,
            "total_spent": customer.total_spent,
        }
        for customer in ranked[: max(limit, 0)]
    ]


def customer_rebates(
    customers: Optional[Iterable[Customer]],
    scope: Optional[str] = None,
    limit: int = 5,
) -> list[dict]:
    rebates = [
        {
            "id": customer.id,
            "name": customer.name or UNKNOWN_CUSTOMER,
            "purchases": customer.total_spent,
            "rebate": customer.total_spent * REBATE_RATE,
        }
        for customer in scoped(customers, scope)
        if customer.total_spent > 0
    ]
    rebates.sort(key=lambda entry: entry["rebate"], reverse=True)
    return rebates[: max(limit, 0)]
