# app/services/catalog_service.py
from sqlmodel import Session

from app.core.errors import (
    InvalidInputError,
    NotFoundError,
    ProductNotFoundError,
    StoreNotFoundError,
)
from app.models.product import Product
from app.models.store import StoreInfo
from app.repositories.product_repo import ProductRepository
from app.repositories.store_repo import StoreRepository

# "Latest products" shelf size and "new arrival" shelf size
LATEST_PRODUCTS_LIMIT = 3
NEW_PRODUCTS_LIMIT = 1

# Thai for "guitar"
GUITAR_KEYWORD = "กีตาร์"


class CatalogService:
    """
    Read-only store and product lookups.

    Responsibilities:
      - delegate queries to the repositories
      - turn missing point lookups into NotFound errors
      - reject blank search terms / categories before touching storage
    """

    def __init__(self, store_repo: StoreRepository, product_repo: ProductRepository):
        self.store_repo = store_repo
        self.product_repo = product_repo

    @staticmethod
    def _require(value: str, message: str) -> str:
        value = value.strip()
        if not value:
            raise InvalidInputError(message)
        return value

    # ---- stores ----

    def list_stores(self, session: Session) -> list[StoreInfo]:
        return self.store_repo.list_all(session)

    def get_store(self, session: Session, store_id: int) -> StoreInfo:
        store = self.store_repo.get_by_id(session, store_id)
        if not store:
            raise StoreNotFoundError("store not found")
        return store

    # ---- products ----

    def get_product(self, session: Session, product_id: int) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise ProductNotFoundError("Product not found")
        return product

    def get_products_by_store(self, session: Session, store_id: int) -> list[Product]:
        return self.product_repo.list_recent_by_store(
            session, store_id, LATEST_PRODUCTS_LIMIT
        )

    def get_new_products_by_store(
        self, session: Session, store_id: int
    ) -> list[Product]:
        return self.product_repo.list_recent_by_store(
            session, store_id, NEW_PRODUCTS_LIMIT
        )

    def search_products(
        self,
        session: Session,
        query: str,
        store_id: int | None = None,
    ) -> list[Product]:
        query = self._require(query, "Search query is required")
        return self.product_repo.search(session, query, store_id)

    def get_all_products_by_store(
        self,
        session: Session,
        store_id: int,
        sort_order: str = "asc",
    ) -> list[Product]:
        return self.product_repo.list_by_store_sorted(session, store_id, sort_order)

    def get_products_by_category(
        self,
        session: Session,
        category: str,
        store_id: int | None = None,
    ) -> list[Product]:
        category = self._require(category, "Category is required")
        return self.product_repo.list_by_category(session, category, store_id)

    def list_guitars(self, session: Session) -> list[Product]:
        """
        Guitars among each store's latest products.

        Raises:
            NotFoundError: no store currently shows a guitar.
        """
        guitars: list[Product] = []
        for store in self.store_repo.list_all(session):
            for product in self.get_products_by_store(session, store.id):
                if GUITAR_KEYWORD in product.product_name:
                    guitars.append(product)

        if not guitars:
            raise NotFoundError("No guitars found")
        return guitars
