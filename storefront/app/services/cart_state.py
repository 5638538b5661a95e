# storefront/app/services/cart_state.py
"""
Cart state container.

The cart is an ordered tuple of CartItem. Every change goes through
``reduce(state, action)``, which is pure: it never mutates its input and
does no I/O. ``CartStore`` holds the current state for one session and
notifies subscribers after each dispatch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Tuple, Union

from storefront.app.models.cart import CartItem

logger = logging.getLogger(__name__)

ADD_TO_CART = "ADD_TO_CART"
REMOVE_FROM_CART = "REMOVE_FROM_CART"
EMPTY_CART = "EMPTY_CART"
CHECKED_OUT = "CHECKED_OUT"


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


@dataclass(frozen=True)
class CartState:
    items: Tuple[CartItem, ...] = field(default_factory=tuple)

    @property
    def total(self) -> float:
        # quantity is 1 per entry; duplicates count separately
        return sum((item.price for item in self.items), 0.0)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "items": [item.model_dump() for item in self.items],
            "count": len(self.items),
            "total": self.total,
        }


INITIAL_STATE = CartState()


# ---------- action creators ----------

def add_to_cart(product: Union[CartItem, Mapping[str, Any]]) -> Action:
    item = product if isinstance(product, CartItem) else CartItem.model_validate(dict(product))
    return Action(ADD_TO_CART, item)


def remove_from_cart(product_id: str) -> Action:
    return Action(REMOVE_FROM_CART, product_id)


def empty_cart() -> Action:
    return Action(EMPTY_CART)


def checked_out(items: Tuple[CartItem, ...]) -> Action:
    """Remove the entries that went into an order, one occurrence per item."""
    return Action(CHECKED_OUT, tuple(items))


# ---------- reducer ----------

def reduce(state: CartState, action: Action) -> CartState:
    if action.type == ADD_TO_CART:
        return CartState(items=state.items + (action.payload,))
    if action.type == REMOVE_FROM_CART:
        # drops every entry with that id, not just the first
        return CartState(items=tuple(i for i in state.items if i.id != action.payload))
    if action.type == EMPTY_CART:
        return INITIAL_STATE
    if action.type == CHECKED_OUT:
        # entries added after the order was built survive
        pending = list(action.payload)
        kept = []
        for item in state.items:
            if item in pending:
                pending.remove(item)
            else:
                kept.append(item)
        return CartState(items=tuple(kept))
    return state


# ---------- container ----------

Listener = Callable[[CartState], None]


class CartStore:
    def __init__(self, state: CartState = INITIAL_STATE) -> None:
        self._state = state
        self._listeners: List[Listener] = []

    def get_state(self) -> CartState:
        return self._state

    def dispatch(self, action: Action) -> CartState:
        self._state = reduce(self._state, action)
        logger.debug("cart %s -> %d item(s)", action.type, len(self._state.items))
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
