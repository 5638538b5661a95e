from typing import Any, Dict

from fastapi import APIRouter, Depends

from storefront.app.api.deps import CartSession, cart_session
from storefront.app.models.cart import CartItem, CartSnapshot
from storefront.app.services.cart_state import add_to_cart, empty_cart, remove_from_cart

router = APIRouter(tags=["cart"])


@router.get("/cart", response_model=CartSnapshot)
async def get_cart(session: CartSession = Depends(cart_session)) -> Dict[str, Any]:
    return session.cart.get_state().snapshot()


@router.post("/cart/items", response_model=CartSnapshot)
async def add_item(item: CartItem, session: CartSession = Depends(cart_session)) -> Dict[str, Any]:
    return session.cart.dispatch(add_to_cart(item)).snapshot()


@router.delete("/cart/items/{product_id}", response_model=CartSnapshot)
async def remove_item(product_id: str, session: CartSession = Depends(cart_session)) -> Dict[str, Any]:
    return session.cart.dispatch(remove_from_cart(product_id)).snapshot()


@router.delete("/cart", response_model=CartSnapshot)
async def clear_cart(session: CartSession = Depends(cart_session)) -> Dict[str, Any]:
    return session.cart.dispatch(empty_cart()).snapshot()
