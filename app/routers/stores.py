# app/routers/stores.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.repositories.store_repo import StoreRepository
from app.schemas.store import StoreList, StoreRead
from app.services.catalog_service import CatalogService

router = APIRouter(tags=["Stores"])

service = CatalogService(StoreRepository(), ProductRepository())


@router.get("/AllStoreInfo", response_model=StoreList)
def list_stores(session: Session = Depends(get_session)):
    """
    List every store.
    """
    return {"store_info": service.list_stores(session)}


@router.get("/store/{store_id}", response_model=StoreRead)
def get_store(store_id: int, session: Session = Depends(get_session)):
    """
    Get a single store by id.

    - 404 if the store does not exist.
    """
    return service.get_store(session, store_id)
