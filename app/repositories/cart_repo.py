# app/repositories/cart_repo.py
import logging
from datetime import datetime, timezone

from sqlalchemy import delete, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from app.core.errors import CartLineNotFoundError, CheckoutFailedError
from app.database import storage_errors
from app.models.cart import CART_STATUS_CHECKED_OUT, CART_STATUS_IN_CART, CartItem
from app.models.order import ORDER_STATUS_ORDERED, OrderHistory
from app.models.product import Product
from app.schemas.product import ProductRead

logger = logging.getLogger(__name__)

# Dialects that can upsert against the partial in_cart index
UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CartRepository:
    """
    Data access layer for the cart table.

    State machine per store, over CartItem.status:
      - in_cart -> checked_out          (finalize_cart_status)
      - in_cart -> archived + deleted   (checkout)
    """

    def _in_cart(self, store_id: int):
        return (
            col(CartItem.store_id) == store_id,
            col(CartItem.status) == CART_STATUS_IN_CART,
        )

    # ---- cart mutation ----

    def add_to_cart(
        self,
        session: Session,
        store_id: int,
        product_id: int,
        quantity: int,
    ) -> None:
        """
        Insert an in_cart line, or add `quantity` to the existing one.

        Runs as one INSERT .. ON CONFLICT statement, so two concurrent adds
        for a new (store, product) can never both insert.
        """
        dialect = session.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect)

        with storage_errors("add item to cart"):
            if insert is not None:
                stmt = insert(CartItem).values(
                    store_id=store_id,
                    product_id=product_id,
                    quantity=quantity,
                    added_at=_utcnow(),
                    status=CART_STATUS_IN_CART,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=["store_id", "product_id"],
                    index_where=col(CartItem.status) == CART_STATUS_IN_CART,
                    set_={"quantity": col(CartItem.quantity) + stmt.excluded.quantity},
                )
                session.execute(stmt)
            else:
                self._lock_and_accumulate(session, store_id, product_id, quantity)
            session.commit()

    def _lock_and_accumulate(
        self,
        session: Session,
        store_id: int,
        product_id: int,
        quantity: int,
    ) -> None:
        # Fallback for dialects without ON CONFLICT: row lock, then branch
        stmt = (
            select(CartItem)
            .where(*self._in_cart(store_id), CartItem.product_id == product_id)
            .with_for_update()
        )
        existing = session.exec(stmt).first()
        if existing:
            existing.quantity += quantity
            session.add(existing)
        else:
            session.add(
                CartItem(
                    store_id=store_id,
                    product_id=product_id,
                    quantity=quantity,
                    added_at=_utcnow(),
                    status=CART_STATUS_IN_CART,
                )
            )

    def remove_from_cart(
        self,
        session: Session,
        store_id: int,
        product_id: int,
    ) -> None:
        """
        Raises:
            CartLineNotFoundError: no in_cart line for (store, product).
        """
        stmt = delete(CartItem).where(
            *self._in_cart(store_id), col(CartItem.product_id) == product_id
        )
        with storage_errors("delete product from cart"):
            result = session.execute(stmt)
            session.commit()

        if result.rowcount == 0:
            raise CartLineNotFoundError("product not found in cart")

    def list_cart(self, session: Session, store_id: int) -> list[ProductRead]:
        """
        Products in the store's cart, each carrying the cart line quantity.
        """
        stmt = (
            select(Product, CartItem.quantity)
            .join(CartItem, col(CartItem.product_id) == col(Product.id))
            .where(*self._in_cart(store_id))
            .order_by(col(CartItem.added_at), col(CartItem.id))
        )
        with storage_errors("get cart items"):
            rows = session.exec(stmt).all()

        return [
            ProductRead.model_validate(product).model_copy(update={"quantity": qty})
            for product, qty in rows
        ]

    # ---- checkout ----

    def finalize_cart_status(self, session: Session, store_id: int) -> int:
        """
        Flip every in_cart line of the store to checked_out in one statement.

        Order history is not touched. Returns the number of lines flipped.
        """
        stmt = (
            update(CartItem)
            .where(*self._in_cart(store_id))
            .values(status=CART_STATUS_CHECKED_OUT, checked_out_at=_utcnow())
        )
        with storage_errors("checkout cart"):
            result = session.execute(stmt)
            session.commit()
        return result.rowcount

    def checkout(self, session: Session, store_id: int) -> int:
        """
        Move every in_cart line of the store into order_history.

        One transaction: each line gets an 'ordered' history row and is then
        deleted. Any failure rolls back everything, so either all lines are
        archived or none are.

        Returns the number of archived lines.

        Raises:
            CheckoutFailedError: a statement failed and the transaction was
            rolled back.
        """
        try:
            stmt = (
                select(CartItem)
                .where(*self._in_cart(store_id))
                .order_by(col(CartItem.id))
            )
            lines = session.exec(stmt).all()
            for line in lines:
                self._archive_line(session, line)
            session.commit()
        except Exception as exc:
            session.rollback()
            logger.warning("Checkout of store %s rolled back: %s", store_id, exc)
            if isinstance(exc, SQLAlchemyError):
                raise CheckoutFailedError(
                    f"failed to checkout store {store_id}: {exc}"
                ) from exc
            raise

        return len(lines)

    def _archive_line(self, session: Session, line: CartItem) -> None:
        session.add(
            OrderHistory(
                store_id=line.store_id,
                product_id=line.product_id,
                quantity=line.quantity,
                status=ORDER_STATUS_ORDERED,
            )
        )
        session.delete(line)
        session.flush()
