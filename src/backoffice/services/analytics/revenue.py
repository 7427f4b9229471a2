"""Revenue and sales rollups over order snapshots."""

from __future__ import annotations

from typing import Iterable, Optional

from .scope import scoped
from ...models.domain import Order, Product

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

UNKNOWN_PRODUCT = "Unknown Product"


def total_revenue(orders: Optional[Iterable[Order]], scope: Optional[str] = None) -> float:
    return sum((order.total_amount for order in scoped(orders, scope)), 0)


def monthly_revenue(orders: Optional[Iterable[Order]], scope: Optional[str] = None) -> list[dict]:
    """Revenue per calendar month, January first, twelve entries always.

    Orders without a usable ``order_date`` do not land in any bucket.
    """

    totals = [0] * len(MONTHS)
    for order in scoped(orders, scope):
        if order.order_date is None:
            continue
        totals[order.order_date.month - 1] += order.total_amount
    return [{"name": month, "total": total} for month, total in zip(MONTHS, totals)]


def products_sold(orders: Optional[Iterable[Order]], scope: Optional[str] = None) -> float:
    return sum((item.quantity for order in scoped(orders, scope) for item in order.items), 0)


def product_sales_ranking(
    orders: Optional[Iterable[Order]],
    products: Optional[Iterable[Product]],
    scope: Optional[str] = None,
    limit: int = 5,
) -> list[dict]:
    """Best-selling products by line-item value (``quantity * unit_price``)."""

    sales: dict[str, float] = {}
    for order in scoped(orders, scope):
        for item in order.items:
            if not item.product_id or not item.quantity or not item.unit_price:
                continue
            sales[item.product_id] = sales.get(item.product_id, 0) + item.subtotal

    names = {product.id: product.name for product in (products or ())}
    ranked = sorted(sales.items(), key=lambda entry: entry[1], reverse=True)
    return [
        {
            "product_id": product_id,
            "name": names.get(product_id) or UNKNOWN_PRODUCT,
            "sales": total,
        }
        for product_id, total in ranked[: max(limit, 0)]
    ]
