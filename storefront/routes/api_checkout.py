import logging
from typing import Any, Dict, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.app.api.deps import CartSession, cart_session
from storefront.app.core.config import settings
from storefront.app.core.errors import CheckoutFailed
from storefront.app.integrations.orders_client import HttpOrderSink
from storefront.app.services.checkout_service import OrderSink, StoreOrderSink, checkout
from storefront.app.services.document_store import DocumentStoreProto, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


def get_order_sink(store: DocumentStoreProto = Depends(get_store)) -> OrderSink:
    if settings.uses_remote_orders:
        return HttpOrderSink(settings.orders_api_url)
    return StoreOrderSink(store)


@router.post("/cart/checkout", status_code=201, response_model=None)
async def checkout_cart(
    session: CartSession = Depends(cart_session),
    sink: OrderSink = Depends(get_order_sink),
) -> Union[Dict[str, Any], JSONResponse]:
    try:
        result = await checkout(
            session.cart,
            sink,
            clear_on_failure=settings.checkout_clear_on_failure,
        )
    except CheckoutFailed as exc:
        resp = JSONResponse(
            status_code=502,
            content={
                "status": "error",
                "detail": str(exc),
                "cleared": exc.cleared,
                "cart": session.cart.get_state().snapshot(),
            },
        )
        session.attach(resp)
        return resp
    return {"order": result.order, "total": result.total, "cleared": result.cleared}
