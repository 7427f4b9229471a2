"""Normalization of raw store records into domain objects.

Every default for a missing or malformed field is applied here, once, so the
services downstream can rely on typed values.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional

from ..config import settings
from ..models.domain import Agent, Customer, Order, OrderItem, Product, Territory

_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y")


def _coerce_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0
        return int(number) if number.is_integer() else number
    return 0


def _coerce_int(value: Any) -> int:
    return int(_coerce_number(value))


def _coerce_optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = _text(value).replace(",", "")
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _status(value: Any, default: str) -> str:
    text = _text(value).lower()
    return text or default


def parse_date(value: Any) -> Optional[date]:
    """Parse an order date; return ``None`` when it cannot be understood."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _text(value)
    if not text:
        return None
    candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(candidate).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def agent_from_record(key: str, raw: Mapping[str, Any]) -> Agent:
    target = _coerce_number(raw.get("sales_target"))
    return Agent(
        id=_text(raw.get("id")) or key,
        agent_id=_text(raw.get("agent_id")),
        name=_text(raw.get("name")),
        email=_text(raw.get("email")),
        contact=_text(raw.get("contact")),
        area_covered=_text(raw.get("area_covered")),
        status=_status(raw.get("status"), "active"),
        # zero or missing targets fall back to the default target
        sales_target=target or settings.default_sales_target,
        customers_count=_coerce_int(raw.get("customers_count")),
        total_sales=_coerce_number(raw.get("total_sales")),
        created_at=_text(raw.get("created_at")) or None,
        last_updated=_text(raw.get("last_updated")) or None,
        latitude=_coerce_optional_float(raw.get("latitude")),
        longitude=_coerce_optional_float(raw.get("longitude")),
    )


def customer_from_record(key: str, raw: Mapping[str, Any]) -> Customer:
    return Customer(
        id=_text(raw.get("id")) or key,
        customer_id=_text(raw.get("customer_id")),
        name=_text(raw.get("name")),
        email=_text(raw.get("email")),
        contact=_text(raw.get("contact")),
        location=_text(raw.get("location")),
        agent_id=_text(raw.get("agent_id")),
        status=_status(raw.get("status"), "active"),
        total_spent=_coerce_number(raw.get("total_spent")),
        total_orders=_coerce_int(raw.get("total_orders")),
        created_at=_text(raw.get("created_at")) or None,
        latitude=_coerce_optional_float(raw.get("latitude")),
        longitude=_coerce_optional_float(raw.get("longitude")),
    )


def item_from_record(raw: Any) -> Optional[OrderItem]:
    if not isinstance(raw, Mapping):
        return None
    return OrderItem(
        product_id=_text(raw.get("product_id")),
        product_name=_text(raw.get("product_name")),
        quantity=_coerce_number(raw.get("quantity")),
        unit_price=_coerce_number(raw.get("unit_price")),
    )


def order_from_record(key: str, raw: Mapping[str, Any]) -> Order:
    raw_items = raw.get("items")
    if isinstance(raw_items, Mapping):
        # realtime stores may persist arrays as index-keyed objects
        raw_items = [raw_items[index] for index in sorted(raw_items, key=lambda k: (len(str(k)), str(k)))]
    items: list[OrderItem] = []
    if isinstance(raw_items, (list, tuple)):
        for entry in raw_items:
            item = item_from_record(entry)
            if item is not None:
                items.append(item)
    return Order(
        id=_text(raw.get("id")) or key,
        order_id=_text(raw.get("order_id")),
        customer_id=_text(raw.get("customer_id")),
        customer_name=_text(raw.get("customer_name")),
        agent_id=_text(raw.get("agent_id")),
        order_date=parse_date(raw.get("order_date")),
        total_amount=_coerce_number(raw.get("total_amount")),
        status=_status(raw.get("status"), "pending"),
        items=tuple(items),
        created_at=_text(raw.get("created_at")) or None,
    )


def product_from_record(key: str, raw: Mapping[str, Any]) -> Product:
    return Product(
        id=_text(raw.get("id")) or key,
        name=_text(raw.get("name")),
        price=_coerce_number(raw.get("price")),
        sku=_text(raw.get("sku")),
    )


def territory_from_record(key: str, raw: Mapping[str, Any]) -> Territory:
    return Territory(
        id=_text(raw.get("id")) or key,
        name=_text(raw.get("name")),
        agent_id=_text(raw.get("agent_id")),
        description=_text(raw.get("description")),
    )


def _parse_collection(records: Optional[Mapping[str, Any]], parser) -> tuple:
    if not records:
        return tuple()
    parsed = []
    for key, raw in records.items():
        if not isinstance(raw, Mapping):
            continue  # ignore tombstones and scalar junk
        parsed.append(parser(str(key), raw))
    return tuple(parsed)


def parse_agents(records: Optional[Mapping[str, Any]]) -> tuple[Agent, ...]:
    return _parse_collection(records, agent_from_record)


def parse_customers(records: Optional[Mapping[str, Any]]) -> tuple[Customer, ...]:
    return _parse_collection(records, customer_from_record)


def parse_orders(records: Optional[Mapping[str, Any]]) -> tuple[Order, ...]:
    return _parse_collection(records, order_from_record)


def parse_products(records: Optional[Mapping[str, Any]]) -> tuple[Product, ...]:
    return _parse_collection(records, product_from_record)


def parse_territories(records: Optional[Mapping[str, Any]]) -> tuple[Territory, ...]:
    return _parse_collection(records, territory_from_record)
