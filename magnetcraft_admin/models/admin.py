"""Admin dashboard data models."""

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

from .auth import Role
from .report import Pagination

PENDING_STATUS = "pending"
COMPLETED_STATUS = "delivered"


def _as_string(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


StrId = Annotated[str, BeforeValidator(_as_string)]


class AdminUser(BaseModel):
    """Row of the admin user table."""

    id: StrId = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Account email")
    orders: int = Field(0, description="Number of orders placed")
    total_spent: float = Field(
        0.0, alias="totalSpent", description="Lifetime spend")
    role: Role = Field(Role.CUSTOMER, description="Account role")
    is_active: bool = Field(True, description="Account active status")
    created_at: Optional[str] = Field(None, description="Date joined")

    class Config:
        populate_by_name = True
        frozen = True


class Order(BaseModel):
    """Row of the admin order table."""

    id: StrId = Field(..., description="Order ID")
    order_number: Optional[str] = Field(None, description="Order number")
    customer: Optional[str] = Field(None, description="Customer name")
    date: Optional[str] = Field(None, description="Order date")
    items: str = Field("", description="Item summary")
    total: float = Field(0.0, description="Order total")
    status: str = Field(..., description="Fulfilment status")
    payment_method: Optional[str] = Field(
        None, alias="paymentMethod", description="Payment method")
    notes: Optional[str] = Field(None, description="Admin notes")

    @property
    def is_pending(self) -> bool:
        return self.status.lower() == PENDING_STATUS

    @property
    def is_completed(self) -> bool:
        return self.status.lower() == COMPLETED_STATUS

    @classmethod
    def from_response(cls, body: dict) -> "Order":
        """Build an order, falling back to ``customer_name`` for the customer."""
        data = dict(body)
        if not data.get("customer") and data.get("customer_name"):
            data["customer"] = data["customer_name"]
        return cls(**data)

    class Config:
        populate_by_name = True
        frozen = True


class AdminData(BaseModel):
    """Users and one page of orders loaded for the admin dashboard."""

    users: List[AdminUser] = Field(default_factory=list)
    orders: List[Order] = Field(default_factory=list)
    orders_pagination: Optional[Pagination] = Field(None)


class AdminOverview(BaseModel):
    """Aggregates shown on the dashboard overview tab."""

    total_revenue: float = Field(..., description="Sum of order totals")
    total_orders: int = Field(..., description="Number of orders")
    pending_orders: int = Field(..., description="Orders awaiting fulfilment")
    completed_orders: int = Field(..., description="Delivered orders")
    total_users: int = Field(..., description="Registered users")

    class Config:
        frozen = True

