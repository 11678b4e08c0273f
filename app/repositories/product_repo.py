# app/repositories/product_repo.py
from sqlmodel import Session, col, select

from app.database import storage_errors
from app.models.product import Product


class ProductRepository:
    """
    Data access layer for product_info.

    - Pure DB operations (queries only, the catalog is read-only here).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        with storage_errors("get product"):
            return session.get(Product, product_id)

    def list_recent_by_store(
        self,
        session: Session,
        store_id: int,
        limit: int,
    ) -> list[Product]:
        """
        Newest products of a store first.
        """
        stmt = (
            select(Product)
            .where(Product.store_id == store_id)
            .order_by(col(Product.created_at).desc(), col(Product.id).desc())
            .limit(limit)
        )
        with storage_errors("get products"):
            return session.exec(stmt).all()

    def search(
        self,
        session: Session,
        query: str,
        store_id: int | None = None,
    ) -> list[Product]:
        """
        Case-insensitive substring match on product_name, ordered by name.
        """
        stmt = select(Product).where(
            col(Product.product_name).icontains(query, autoescape=True)
        )
        if store_id is not None:
            stmt = stmt.where(Product.store_id == store_id)
        stmt = stmt.order_by(Product.product_name)
        with storage_errors("search products"):
            return session.exec(stmt).all()

    def list_by_store_sorted(
        self,
        session: Session,
        store_id: int,
        sort_order: str = "asc",
    ) -> list[Product]:
        # Unknown sort orders fall back to ascending price
        price = col(Product.price)
        order_by = price.desc() if sort_order == "desc" else price.asc()
        stmt = (
            select(Product)
            .where(Product.store_id == store_id)
            .order_by(order_by, col(Product.id))
        )
        with storage_errors("get products"):
            return session.exec(stmt).all()

    def list_by_category(
        self,
        session: Session,
        category: str,
        store_id: int | None = None,
    ) -> list[Product]:
        stmt = select(Product).where(Product.category == category)
        if store_id is not None:
            stmt = stmt.where(Product.store_id == store_id)
        stmt = stmt.order_by(col(Product.created_at).desc(), col(Product.id).desc())
        with storage_errors("get products by category"):
            return session.exec(stmt).all()
