"""Customer API schemas."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

CustomerStatus = Literal["active", "inactive", "blocked"]


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    contact: str = ""
    location: str = ""
    agent_id: str = Field(default="", description="Store key of the assigned agent; empty when unassigned.")
    status: CustomerStatus = "active"
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    contact: Optional[str] = None
    location: Optional[str] = None
    agent_id: Optional[str] = None
    status: Optional[CustomerStatus] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class CustomerModel(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    contact: str
    location: str
    agent_id: str
    agent_name: str
    status: str
    total_spent: float
    total_orders: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None
