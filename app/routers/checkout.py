# app/routers/checkout.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.schemas.cart import CheckoutResult
from app.services.checkout_service import CheckoutService
from app.services.payment_gateway import PaymentGateway, get_payment_gateway

router = APIRouter(tags=["Checkout"])

settings = get_settings()

cart_repo = CartRepository()
service = CheckoutService(cart_repo, mode=settings.CHECKOUT_MODE)


@router.post("/checkout/{store_id}", response_model=CheckoutResult)
def checkout(
    store_id: int,
    session: Session = Depends(get_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """
    Pay for and finalize the store's cart.

    - 400 if the cart is empty.
    - 402 if the payment is declined (cart left untouched).
    """
    return service.checkout(session, store_id, gateway)
