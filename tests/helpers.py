"""State inspection helpers; each call uses a fresh session."""

from sqlmodel import select

from app.database import ConnectionManager
from app.models.cart import CartItem
from app.models.order import OrderHistory


def cart_lines(connections: ConnectionManager, store_id: int) -> list[CartItem]:
    with connections.session() as session:
        stmt = select(CartItem).where(CartItem.store_id == store_id).order_by(CartItem.id)
        return list(session.exec(stmt).all())


def order_history(connections: ConnectionManager, store_id: int) -> list[OrderHistory]:
    with connections.session() as session:
        stmt = (
            select(OrderHistory)
            .where(OrderHistory.store_id == store_id)
            .order_by(OrderHistory.id)
        )
        return list(session.exec(stmt).all())
