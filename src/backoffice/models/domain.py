"""Domain models for the back-office collections."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(slots=True)
class Agent:
    """A field sales agent."""

    id: str
    agent_id: str
    name: str
    email: str
    contact: str
    area_covered: str
    status: str
    sales_target: float
    customers_count: int
    total_sales: float
    created_at: Optional[str] = None
    last_updated: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_location(self) -> bool:
        return bool(self.latitude) and bool(self.longitude)


@dataclass(slots=True)
class Customer:
    """A customer account, optionally assigned to an agent."""

    id: str
    customer_id: str
    name: str
    email: str
    contact: str
    location: str
    agent_id: str
    status: str
    total_spent: float
    total_orders: int
    created_at: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_location(self) -> bool:
        return bool(self.latitude) and bool(self.longitude)


@dataclass(slots=True)
class OrderItem:
    product_id: str
    product_name: str
    quantity: float
    unit_price: float

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price


@dataclass(slots=True)
class Order:
    """A customer order; ``total_amount`` is trusted as entered."""

    id: str
    order_id: str
    customer_id: str
    customer_name: str
    agent_id: str
    order_date: Optional[date]
    total_amount: float
    status: str
    items: tuple[OrderItem, ...] = field(default_factory=tuple)
    created_at: Optional[str] = None


@dataclass(slots=True)
class Product:
    id: str
    name: str
    price: float
    sku: str


@dataclass(slots=True)
class Territory:
    id: str
    name: str
    agent_id: str
    description: str
