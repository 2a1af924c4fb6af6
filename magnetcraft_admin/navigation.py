"""Navigation header model.

The header gets everything it shows from an explicit ``NavigationContext``
rather than reaching into global session or cart state.
"""

from typing import List, Optional, Protocol

import structlog
from pydantic import BaseModel, Field

from .auth.session import MagnetCraftAuth
from .models.auth import User
from .models.cart import Cart

logger = structlog.get_logger(__name__)

HOME_PATH = "/"


class NavigationContext(Protocol):
    """What the header needs to know about the session and the cart."""

    @property
    def current_user(self) -> Optional[User]: ...

    @property
    def cart_item_count(self) -> int: ...

    async def logout(self) -> None: ...


class NavLink(BaseModel):
    label: str
    path: str


class HeaderView(BaseModel):
    """Everything the header displays."""

    links: List[NavLink] = Field(default_factory=list)
    cart_path: str = "/cart"
    cart_badge: Optional[int] = Field(
        None, description="Item count, hidden when the cart is empty")
    user_name: Optional[str] = None
    actions: List[NavLink] = Field(default_factory=list)

    class Config:
        frozen = True


def build_header(context: NavigationContext) -> HeaderView:
    user = context.current_user

    links = [
        NavLink(label="Home", path=HOME_PATH),
        NavLink(label="About", path="/about"),
        NavLink(label="Contact", path="/contact"),
    ]
    if user is not None:
        links.append(NavLink(label="Dashboard", path="/dashboard"))

    if user is not None:
        actions = [NavLink(label="Logout", path=HOME_PATH)]
    else:
        actions = [
            NavLink(label="Login", path="/login"),
            NavLink(label="Sign Up", path="/signup"),
        ]

    count = context.cart_item_count
    return HeaderView(
        links=links,
        cart_badge=count if count > 0 else None,
        user_name=user.name if user else None,
        actions=actions
    )


async def handle_logout(context: NavigationContext) -> str:
    """Log out and return the path to redirect to."""
    await context.logout()
    return HOME_PATH


class SessionNavigation:
    """``NavigationContext`` backed by the auth manager and a cart."""

    def __init__(self, auth: MagnetCraftAuth, cart: Cart):
        self.auth = auth
        self.cart = cart

    @property
    def current_user(self) -> Optional[User]:
        return self.auth.current_user

    @property
    def cart_item_count(self) -> int:
        return self.cart.item_count()

    async def logout(self) -> None:
        await self.auth.logout()
        logger.info("Signed out from header")
