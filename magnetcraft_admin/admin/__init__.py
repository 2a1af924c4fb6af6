"""Admin dashboard: data loading and the tabbed shell."""

from .data import AdminDataLoader
from .shell import AdminAccessError, AdminShell, AdminTab

__all__ = ["AdminAccessError", "AdminDataLoader", "AdminShell", "AdminTab"]
