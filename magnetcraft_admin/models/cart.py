"""Shopping cart models."""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

ItemId = Union[int, str]


class CustomImage(BaseModel):
    """Customer-uploaded image attached to a custom magnet."""

    id: ItemId = Field(..., description="Image ID")
    url: str = Field(..., description="Image URL")
    name: str = Field(..., description="File name")
    upload_status: Optional[str] = Field(
        None, description="approved, pending, uploading or error")


class Product(BaseModel):
    """Catalogue product."""

    id: ItemId = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    price: float = Field(..., description="Unit price")
    image: Optional[str] = Field(None, description="Image URL")
    description: Optional[str] = Field(None, description="Description")


class CartItem(Product):
    """Product line in the cart."""

    quantity: int = Field(1, description="Units in the cart")
    custom_images: List[CustomImage] = Field(
        default_factory=list, description="Attached custom images")
    order_id: Optional[ItemId] = Field(
        None, description="Order this line was created for")


class Cart:
    """In-memory cart backing the header badge and checkout."""

    def __init__(self, items: Optional[List[CartItem]] = None):
        self.items: List[CartItem] = list(items or [])

    def add(self, product: Product) -> None:
        """Add one unit of a product, merging with an existing line."""
        for index, item in enumerate(self.items):
            if item.id == product.id:
                self.items[index] = item.model_copy(
                    update={"quantity": item.quantity + 1})
                return

        line = product.model_dump()
        line["quantity"] = 1
        self.items.append(CartItem(**line))

    def add_custom(self, item: CartItem) -> None:
        """Append a custom product line; custom lines are never merged."""
        self.items.append(item)

    def remove(self, product_id: ItemId) -> None:
        self.items = [item for item in self.items if item.id != product_id]

    def update_quantity(self, product_id: ItemId, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(product_id)
            return

        self.items = [
            item.model_copy(update={"quantity": quantity})
            if item.id == product_id else item
            for item in self.items
        ]

    def clear(self) -> None:
        self.items = []

    def total(self) -> float:
        return sum(item.price * item.quantity for item in self.items)

    def item_count(self) -> int:
        """Total units, as shown on the cart badge."""
        return sum(item.quantity for item in self.items)

    def order_ids(self) -> List[ItemId]:
        """Distinct order IDs in first-seen order."""
        seen: List[ItemId] = []
        for item in self.items:
            if item.order_id is not None and item.order_id not in seen:
                seen.append(item.order_id)
        return seen

    def items_for_order(self, order_id: ItemId) -> List[CartItem]:
        return [item for item in self.items if item.order_id == order_id]
