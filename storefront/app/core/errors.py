from __future__ import annotations


class StorefrontError(Exception):
    """Base class for errors raised by the storefront services."""


class StoreError(StorefrontError):
    """The document store could not read or write a collection."""


class OrderSinkError(StorefrontError):
    """An order could not be delivered to its destination."""


class CheckoutFailed(StorefrontError):
    """Checkout could not persist the order.

    ``cleared`` tells whether the cart was emptied anyway.
    """

    def __init__(self, message: str, *, cleared: bool) -> None:
        super().__init__(message)
        self.cleared = cleared
