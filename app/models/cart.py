# app/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field

# Cart line lifecycle
CART_STATUS_IN_CART = "in_cart"
CART_STATUS_CHECKED_OUT = "checked_out"


class CartItem(SQLModel, table=True):
    """
    Pending product selection for a store.

    A store cannot have 2 in_cart rows for the same product: the partial
    unique index below is the conflict target of the add-to-cart upsert.
    Checked-out rows are kept and fall outside the index.
    """

    __tablename__ = "cart"
    __table_args__ = (
        Index(
            "uq_cart_in_cart_line",
            "store_id",
            "product_id",
            unique=True,
            postgresql_where=text("status = 'in_cart'"),
            sqlite_where=text("status = 'in_cart'"),
        ),
    )

    id: int | None = Field(default=None, primary_key=True)

    store_id: int = Field(
        foreign_key="store_info.id",
        index=True,
    )

    product_id: int = Field(
        foreign_key="product_info.id",
        index=True,
    )

    quantity: int = Field(
        gt=0,
        description="Must be >= 1",
    )

    added_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    # in_cart | checked_out
    status: str = Field(
        default=CART_STATUS_IN_CART,
        index=True,
    )

    checked_out_at: datetime | None = Field(default=None)
