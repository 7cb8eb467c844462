from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T) -> ApiResponse[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> ApiResponse[T]:
        return cls(success=False, error=error)


class MenuItemResponse(BaseModel):
    id: str
    name: str
    description: str
    price: Decimal
    image: str
    category: str
    tags: list[str] = Field(default_factory=list)
    popular: bool | None = None
    available: bool


class CartItemResponse(MenuItemResponse):
    quantity: int


class DeleteMenuItemResponse(BaseModel):
    success: bool


class OrderResponse(BaseModel):
    id: str
    tableNumber: str
    items: list[CartItemResponse] = Field(default_factory=list)
    totalAmount: Decimal
    status: str
    progress: int
    createdAt: dt.datetime
    estimatedTime: int | None = None


class CreateOrderResponse(BaseModel):
    orderId: str
    estimatedTime: int


class SubmitOrderResponse(BaseModel):
    orderId: str
    estimatedTime: int
    transactionId: str
    totalAmount: Decimal


class OrderStatusResponse(BaseModel):
    status: str
    progress: int
    estimatedTime: int | None = None


class PaymentResponse(BaseModel):
    transactionId: str
    success: bool


class RevenueDatumResponse(BaseModel):
    date: dt.date
    revenue: Decimal
    orderCount: int


class TableValidationResponse(BaseModel):
    valid: bool
    message: str


class DashboardStatsResponse(BaseModel):
    totalOrders: int
    activeOrders: int
    completionRate: int
    todayRevenue: Decimal
    todayOrderCount: int


class StaffSessionResponse(BaseModel):
    loggedIn: bool
