# app/models/store.py
from sqlmodel import SQLModel, Field


class StoreInfo(SQLModel, table=True):
    """
    Storefront shown in the catalog.

    Rows are maintained outside this service; we only read them.
    """

    __tablename__ = "store_info"

    id: int | None = Field(default=None, primary_key=True)

    logo_path: str = Field(default="")
    store_name: str = Field(index=True)
    description: str = Field(default="")
    address: str = Field(default="")
    phone_number: str = Field(default="")
    email: str = Field(default="")
