# app/schemas/store.py
from sqlmodel import SQLModel


class StoreRead(SQLModel):
    """
    Public representation of a store.
    """

    id: int
    logo_path: str
    store_name: str
    description: str
    address: str
    phone_number: str
    email: str


class StoreList(SQLModel):
    store_info: list[StoreRead]
