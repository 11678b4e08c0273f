# app/services/payment_gateway.py
import logging
from typing import Protocol

from app.core.config import get_settings
from app.schemas.cart import PaymentDecision

logger = logging.getLogger(__name__)


class PaymentGateway(Protocol):
    """
    Authorizes the charge for a store's cart before it is finalized.
    """

    def authorize(self, store_id: int, amount: float) -> PaymentDecision: ...


class SimulatedPaymentGateway:
    """
    Stand-in gateway with a fixed decision.

    Approves everything by default; set PAYMENT_SIMULATION_APPROVE=false
    to exercise the declined path.
    """

    def __init__(self, approve: bool = True):
        self.approve = approve

    def authorize(self, store_id: int, amount: float) -> PaymentDecision:
        logger.debug("Simulated authorization of %.2f for store %s", amount, store_id)
        if self.approve:
            return PaymentDecision(approved=True)
        return PaymentDecision(approved=False, reason="Payment failed")


def get_payment_gateway() -> PaymentGateway:
    """
    FastAPI dependency for the active payment gateway.
    """
    return SimulatedPaymentGateway(approve=get_settings().PAYMENT_SIMULATION_APPROVE)
