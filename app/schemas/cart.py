# app/schemas/cart.py
from sqlmodel import SQLModel

from app.schemas.product import ProductRead


class CartRead(SQLModel):
    """
    Items currently in a store's cart.

    Each entry is the full product with `quantity` replaced by the cart
    line quantity. An empty cart is an empty list.
    """

    store_id: int
    cart_items: list[ProductRead]


class CartItemAdded(SQLModel):
    message: str = "Product added to cart"
    store_id: int
    product_id: int
    quantity: int


class CartItemRemoved(SQLModel):
    message: str = "Product removed from cart"
    store_id: int
    product_id: int


class PaymentDecision(SQLModel):
    """
    Outcome of a payment authorization.
    """

    approved: bool
    reason: str | None = None


class CheckoutResult(SQLModel):
    message: str = "Checkout successful"
    store_id: int
    total_amount: float
