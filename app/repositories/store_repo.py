# app/repositories/store_repo.py
from sqlmodel import Session, select

from app.database import storage_errors
from app.models.store import StoreInfo


class StoreRepository:

    def list_all(self, session: Session) -> list[StoreInfo]:
        stmt = select(StoreInfo).order_by(StoreInfo.id)
        with storage_errors("get stores"):
            return session.exec(stmt).all()

    def get_by_id(self, session: Session, store_id: int) -> StoreInfo | None:
        with storage_errors("get store"):
            return session.get(StoreInfo, store_id)
