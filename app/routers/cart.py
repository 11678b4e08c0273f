# app/routers/cart.py
from fastapi import APIRouter, Depends, Form
from sqlmodel import Session

from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.schemas.cart import CartItemAdded, CartItemRemoved, CartRead
from app.services.cart_service import CartService

router = APIRouter(tags=["Cart"])

cart_repo = CartRepository()
service = CartService(cart_repo)


@router.post(
    "/store/{store_id}/product/{product_id}/add_to_cart",
    response_model=CartItemAdded,
)
def add_to_cart(
    store_id: int,
    product_id: int,
    quantity: int = Form(1, gt=0),
    session: Session = Depends(get_session),
):
    """
    Add a product to the store's cart.

    - Form field `quantity` defaults to 1 and must be positive.
    - Adding a product already in the cart increases its quantity.
    """
    service.add_to_cart(session, store_id, product_id, quantity)
    return CartItemAdded(store_id=store_id, product_id=product_id, quantity=quantity)


@router.get("/cart/{store_id}", response_model=CartRead)
def get_cart(store_id: int, session: Session = Depends(get_session)):
    """
    Products in the store's cart with their cart quantities.

    An empty cart returns an empty `cart_items` list.
    """
    return CartRead(store_id=store_id, cart_items=service.list_cart(session, store_id))


@router.delete(
    "/store/{store_id}/product/{product_id}/remove_from_cart",
    response_model=CartItemRemoved,
)
def remove_from_cart(
    store_id: int,
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Remove a product from the store's cart.

    - 404 if the product is not in the cart.
    """
    service.remove_from_cart(session, store_id, product_id)
    return CartItemRemoved(store_id=store_id, product_id=product_id)
