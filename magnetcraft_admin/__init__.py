"""MagnetCraft storefront admin client and MCP tool server."""

from .navigation import (
    HeaderView,
    NavigationContext,
    NavLink,
    SessionNavigation,
    build_header,
    handle_logout,
)

__version__ = "0.1.0"

__all__ = [
    "HeaderView",
    "NavigationContext",
    "NavLink",
    "SessionNavigation",
    "build_header",
    "handle_logout",
]
