# app/core/errors.py
"""
Domain errors shared by repositories, services and routers.

Repositories and services raise these; only the HTTP layer
(see app/main.py) turns them into status codes and JSON bodies.
"""


class StorefrontError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ---- caller errors ----


class InvalidInputError(StorefrontError):
    status_code = 400


class EmptyCartError(InvalidInputError):
    pass


class NotFoundError(StorefrontError):
    status_code = 404


class StoreNotFoundError(NotFoundError):
    pass


class ProductNotFoundError(NotFoundError):
    pass


class CartLineNotFoundError(NotFoundError):
    pass


class PaymentDeclinedError(StorefrontError):
    status_code = 402


# ---- storage errors ----


class StorageError(StorefrontError):
    status_code = 500


class StorageUnavailableError(StorageError):
    pass


class CheckoutFailedError(StorageError):
    pass


class RequestTimeoutError(StorefrontError):
    status_code = 504
