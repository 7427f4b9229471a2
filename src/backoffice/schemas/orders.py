"""Order and product API schemas."""

from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

OrderStatus = Literal["pending", "processing", "completed", "cancelled"]


class OrderItemIn(BaseModel):
    product_id: str = Field(..., min_length=1)
    product_name: str = ""
    quantity: float = Field(default=1, gt=0)
    unit_price: float = Field(default=0, ge=0)


class OrderCreate(BaseModel):
    customer_id: str = Field(..., min_length=1, description="Store key of the ordering customer.")
    order_date: date = Field(default_factory=date.today)
    status: OrderStatus = "pending"
    items: List[OrderItemIn]

    @field_validator("items")
    @classmethod
    def validate_items(cls, value: List[OrderItemIn]) -> List[OrderItemIn]:
        if not value:
            raise ValueError("an order needs at least one item")
        return value


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemModel(BaseModel):
    product_id: str
    product_name: str
    quantity: float
    unit_price: float
    subtotal: float


class OrderModel(BaseModel):
    id: str
    order_id: str
    customer_id: str
    customer_name: str
    agent_id: str
    order_date: Optional[str] = None
    total_amount: float
    status: str
    items: List[OrderItemModel]


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    sku: str = ""


class ProductModel(BaseModel):
    id: str
    name: str
    price: float
    sku: str
