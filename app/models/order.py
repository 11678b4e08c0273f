# app/models/order.py
from sqlmodel import SQLModel, Field

ORDER_STATUS_ORDERED = "ordered"


class OrderHistory(SQLModel, table=True):
    """
    Archived purchase line.

    Written only by the archiving checkout (one row per cart line that was
    in_cart at checkout time) and never updated afterwards.
    """

    __tablename__ = "order_history"

    id: int | None = Field(default=None, primary_key=True)

    store_id: int = Field(
        foreign_key="store_info.id",
        index=True,
    )

    product_id: int = Field(
        foreign_key="product_info.id",
        index=True,
    )

    quantity: int = Field(gt=0)

    status: str = Field(
        default=ORDER_STATUS_ORDERED,
        index=True,
    )
