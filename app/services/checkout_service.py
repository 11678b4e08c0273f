# app/services/checkout_service.py
import logging

from sqlmodel import Session

from app.core.config import CheckoutMode
from app.core.errors import EmptyCartError, PaymentDeclinedError
from app.repositories.cart_repo import CartRepository
from app.schemas.cart import CheckoutResult
from app.services.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Business logic for finalizing a store's cart.

    Two cart transitions exist and are kept apart:
      - status_flip: lines stay in `cart` with status checked_out
      - archive    : lines move to `order_history` and are deleted
    `mode` picks which one runs after a successful payment.
    """

    def __init__(self, cart_repo: CartRepository, mode: CheckoutMode = "status_flip"):
        self.cart_repo = cart_repo
        self.mode = mode

    def checkout(
        self,
        session: Session,
        store_id: int,
        gateway: PaymentGateway,
    ) -> CheckoutResult:
        """
        Steps:
          1. Load the cart; error if empty.
          2. Compute total = sum(price * quantity) from that snapshot.
          3. Authorize payment; a decline leaves the cart untouched.
          4. Run the configured cart transition.

        Prices are not re-read after step 1.
        """
        # 1) Load cart
        items = self.cart_repo.list_cart(session, store_id)
        if not items:
            raise EmptyCartError("No items in cart to checkout")

        # 2) Total from snapshot
        total_amount = 0.0
        for item in items:
            total_amount += item.price * item.quantity

        # 3) Payment
        decision = gateway.authorize(store_id, total_amount)
        if not decision.approved:
            logger.info(
                "Payment declined for store %s (%.2f): %s",
                store_id,
                total_amount,
                decision.reason,
            )
            raise PaymentDeclinedError(decision.reason or "Payment failed")

        # 4) Finalize cart
        if self.mode == "archive":
            self.cart_repo.checkout(session, store_id)
        else:
            self.cart_repo.finalize_cart_status(session, store_id)

        return CheckoutResult(store_id=store_id, total_amount=total_amount)
