"""Agent API schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

AgentStatus = Literal["active", "inactive", "suspended"]


class AgentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    contact: str = ""
    area_covered: str = ""
    status: AgentStatus = "active"
    sales_target: float = Field(default=50000, gt=0)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class AgentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    contact: Optional[str] = None
    area_covered: Optional[str] = None
    status: Optional[AgentStatus] = None
    sales_target: Optional[float] = Field(default=None, gt=0)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class AgentModel(BaseModel):
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
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class MonthlySalesModel(BaseModel):
    name: str
    sales: float


class AgentPerformanceDetailModel(BaseModel):
    id: str
    agent_id: str
    name: str
    monthlySales: List[MonthlySalesModel]
    totalSales: float
    salesTarget: float
    performancePercentage: int
    metTarget: bool
    customerCount: int
    orderCount: int


class NextCodeModel(BaseModel):
    code: str
