# app/schemas/product.py
from datetime import datetime

from sqlmodel import SQLModel


class ProductRead(SQLModel):
    """
    Public representation of a product.

    When returned as a cart line, `quantity` is the quantity in the cart,
    not the stock on hand.
    """

    id: int
    product_name: str
    price: float
    quantity: int
    created_at: datetime
    updated_at: datetime
    category: str
    brand: str
    model: str
    store_id: int
    is_recommended: bool
    image_path: str


class ProductDetail(SQLModel):
    product: ProductRead


class ProductList(SQLModel):
    products: list[ProductRead]


class StoreProductList(ProductList):
    store_id: int


class CategoryProductList(ProductList):
    category: str


class StoreCategoryProductList(StoreProductList):
    category: str


class GuitarList(SQLModel):
    guitars: list[ProductRead]
