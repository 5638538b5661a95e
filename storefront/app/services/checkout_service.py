# storefront/app/services/checkout_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Protocol, runtime_checkable

from storefront.app.core.errors import CheckoutFailed, OrderSinkError, StoreError
from storefront.app.models.order import OrderIn, OrderLine
from storefront.app.services import order_service
from storefront.app.services.cart_state import CartState, CartStore, checked_out, empty_cart
from storefront.app.services.document_store import DocumentStoreProto

logger = logging.getLogger(__name__)


@runtime_checkable
class OrderSink(Protocol):
    """Where checkout sends the order it builds."""
    async def submit(self, order: OrderIn) -> Dict[str, Any]: ...


class StoreOrderSink:
    """Writes the order straight into the document store."""

    def __init__(self, store: DocumentStoreProto) -> None:
        self.store = store

    async def submit(self, order: OrderIn) -> Dict[str, Any]:
        return await order_service.create_order(self.store, order)


@dataclass
class CheckoutResult:
    order: Dict[str, Any]
    total: float
    cleared: bool


def build_order(state: CartState) -> OrderIn:
    """One line per cart entry (quantity 1); total is the plain sum of prices."""
    return OrderIn(
        products=[OrderLine(id=item.id, quantity=1) for item in state.items],
        total=state.total,
    )


async def checkout(
    cart: CartStore,
    sink: OrderSink,
    *,
    clear_on_failure: bool = False,
) -> CheckoutResult:
    """
    Turn the current cart into an order and send it through ``sink``.

    Once the sink confirms, the entries that went into the order are removed;
    anything added to the cart while the request was in flight stays. When
    the sink fails the cart is kept, unless ``clear_on_failure`` asks for the
    old behaviour of emptying it regardless. Failures are re-raised as
    CheckoutFailed.
    """
    submitted = cart.get_state()
    order = build_order(submitted)
    try:
        saved = await sink.submit(order)
    except (StoreError, OrderSinkError) as exc:
        cleared = False
        if clear_on_failure:
            cart.dispatch(empty_cart())
            cleared = True
        logger.warning("checkout failed (cart %s): %s", "cleared" if cleared else "kept", exc)
        raise CheckoutFailed(str(exc), cleared=cleared) from exc

    remaining = cart.dispatch(checked_out(submitted.items))
    logger.info(
        "checkout ok order=%s total=%s left_in_cart=%d", saved.get("id"), order.total, len(remaining.items),
        extra={"order_id": saved.get("id")},
    )
    return CheckoutResult(order=saved, total=order.total, cleared=True)
