# app/services/cart_service.py
from sqlmodel import Session

from app.repositories.cart_repo import CartRepository
from app.schemas.product import ProductRead


class CartService:
    """
    Facade over CartRepository.

    Keeps routers independent of the storage layer; errors from the
    repository (not found, storage failures) pass through unchanged.
    """

    def __init__(self, cart_repo: CartRepository):
        self.cart_repo = cart_repo

    def add_to_cart(
        self,
        session: Session,
        store_id: int,
        product_id: int,
        quantity: int,
    ) -> None:
        self.cart_repo.add_to_cart(session, store_id, product_id, quantity)

    def list_cart(self, session: Session, store_id: int) -> list[ProductRead]:
        return self.cart_repo.list_cart(session, store_id)

    def remove_from_cart(
        self,
        session: Session,
        store_id: int,
        product_id: int,
    ) -> None:
        self.cart_repo.remove_from_cart(session, store_id, product_id)
