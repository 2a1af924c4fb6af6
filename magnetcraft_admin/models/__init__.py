"""Data models for the MagnetCraft admin client."""

from .admin import AdminData, AdminOverview, AdminUser, Order
from .auth import AuthState, Role, User
from .cart import Cart, CartItem, CustomImage, Product
from .report import EmailRequest, GenerateRequest, Pagination, Report, ReportPage
from .result import NETWORK_ERROR_MESSAGE, ErrorKind, OperationResult

__all__ = [
    "AdminData",
    "AdminOverview",
    "AdminUser",
    "Order",
    "AuthState",
    "Role",
    "User",
    "Cart",
    "CartItem",
    "CustomImage",
    "Product",
    "EmailRequest",
    "GenerateRequest",
    "Pagination",
    "Report",
    "ReportPage",
    "NETWORK_ERROR_MESSAGE",
    "ErrorKind",
    "OperationResult",
]
