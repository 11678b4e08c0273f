# app/models/product.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry owned by a store.

    Read-only from this service's perspective:
      - id, product_name, price, quantity (on hand), created_at, updated_at,
        category, brand, model, store_id, is_recommended, image_path
    """

    __tablename__ = "product_info"

    id: int | None = Field(default=None, primary_key=True)

    product_name: str = Field(
        index=True,
        description="Display name of the product",
    )

    price: float = Field(
        ge=0,
        description="Unit price",
    )

    quantity: int = Field(
        default=0,
        ge=0,
        description="Units currently on hand",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    category: str = Field(default="", index=True)
    brand: str = Field(default="")
    model: str = Field(default="")

    store_id: int = Field(
        foreign_key="store_info.id",
        index=True,
    )

    is_recommended: bool = Field(default=False)

    image_path: str = Field(default="")
