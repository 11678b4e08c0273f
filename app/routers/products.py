# app/routers/products.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.errors import NotFoundError
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.repositories.store_repo import StoreRepository
from app.schemas.product import (
    CategoryProductList,
    GuitarList,
    ProductDetail,
    ProductList,
    StoreCategoryProductList,
    StoreProductList,
)
from app.services.catalog_service import CatalogService

router = APIRouter(tags=["Products"])

service = CatalogService(StoreRepository(), ProductRepository())


def _require_products(products: list, message: str) -> list:
    if not products:
        raise NotFoundError(message)
    return products


# -------- Store shelves --------


@router.get("/product/{store_id}", response_model=StoreProductList)
def get_products_by_store(store_id: int, session: Session = Depends(get_session)):
    """
    Latest products of a store (newest first).
    """
    products = service.get_products_by_store(session, store_id)
    _require_products(products, "No products found for this store")
    return {"store_id": store_id, "products": products}


@router.get("/newproduct/{store_id}", response_model=StoreProductList)
def get_new_products_by_store(store_id: int, session: Session = Depends(get_session)):
    """
    The newest product of a store.
    """
    products = service.get_new_products_by_store(session, store_id)
    _require_products(products, "No products found for this store")
    return {"store_id": store_id, "products": products}


@router.get("/Allproduct/{store_id}/sort", response_model=StoreProductList)
def get_all_products_by_store(
    store_id: int,
    sortOrder: str = "asc",
    session: Session = Depends(get_session),
):
    """
    Every product of a store ordered by price.

    - `sortOrder=asc|desc`, anything else sorts ascending.
    """
    products = service.get_all_products_by_store(session, store_id, sortOrder)
    _require_products(products, "No products found for this store")
    return {"store_id": store_id, "products": products}


# -------- Search --------


@router.get("/searchproducts", response_model=ProductList)
def search_products(product_name: str = "", session: Session = Depends(get_session)):
    """
    Case-insensitive product name search across all stores.

    - 400 if `product_name` is empty.
    """
    return {"products": service.search_products(session, product_name)}


@router.get("/{store_id}/search", response_model=StoreProductList)
def search_products_by_store(
    store_id: int,
    product_name: str = "",
    session: Session = Depends(get_session),
):
    """
    Product name search within a single store.
    """
    products = service.search_products(session, product_name, store_id)
    return {"store_id": store_id, "products": products}


# -------- Categories --------


@router.get("/{store_id}/by-category", response_model=StoreCategoryProductList)
def get_products_by_category_and_store(
    store_id: int,
    category: str = "",
    session: Session = Depends(get_session),
):
    products = service.get_products_by_category(session, category, store_id)
    _require_products(products, "No products found for this store and category")
    return {"store_id": store_id, "category": category, "products": products}


@router.get("/category", response_model=CategoryProductList)
def get_all_products_by_category(
    category: str = "",
    session: Session = Depends(get_session),
):
    products = service.get_products_by_category(session, category)
    _require_products(products, "No products found for this category")
    return {"category": category, "products": products}


# -------- Single product --------


@router.get("/products/{product_id}", response_model=ProductDetail)
def get_product(product_id: int, session: Session = Depends(get_session)):
    """
    Get a single product by id.

    - 404 if the product does not exist.
    """
    return {"product": service.get_product(session, product_id)}


@router.get("/all-guitars", response_model=GuitarList)
def get_all_guitars(session: Session = Depends(get_session)):
    """
    Guitars currently on any store's latest-products shelf.
    """
    return {"guitars": service.list_guitars(session)}
