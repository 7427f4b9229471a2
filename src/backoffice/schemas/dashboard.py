"""Dashboard and report API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class MonthlyRevenueModel(BaseModel):
    name: str
    total: float


class TopCustomerModel(BaseModel):
    id: str
    customer_id: str
    name: str
    contact: str
    email: str
    total_spent: float


class EntityCountsModel(BaseModel):
    agents: int
    customers: int
    orders: int
    products: int
    territories: int


class DashboardResponse(BaseModel):
    scope: Optional[str] = None
    totalRevenue: float
    totalOrders: int
    totalCustomers: int
    totalProductsSold: float
    counts: EntityCountsModel
    monthlyRevenue: List[MonthlyRevenueModel]
    topCustomers: List[TopCustomerModel]
    degraded: bool = False
    message: Optional[str] = None


class AgentPerformanceModel(BaseModel):
    id: str
    agent_id: str
    name: str
    sales: float
    target: float
    performancePercentage: int
    metTarget: bool


class CustomerRebateModel(BaseModel):
    id: str
    name: str
    purchases: float
    rebate: float


class ProductSalesModel(BaseModel):
    product_id: str
    name: str
    sales: float


class ReportsResponse(BaseModel):
    scope: Optional[str] = None
    agentPerformance: List[AgentPerformanceModel]
    customerRebates: List[CustomerRebateModel]
    productSales: List[ProductSalesModel]
    degraded: bool = False
    message: Optional[str] = None
