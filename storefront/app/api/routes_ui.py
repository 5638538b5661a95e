# storefront/app/api/routes_ui.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from storefront.app.core.config import settings
from storefront.app.services import product_service
from storefront.app.services.cart_sessions import get_cart_sessions
from storefront.app.services.cart_state import INITIAL_STATE
from storefront.app.services.document_store import DocumentStoreProto, get_store

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(settings.templates_dir))


@router.get("/{full_path:path}", response_class=HTMLResponse, include_in_schema=False)
async def storefront_page(
    request: Request,
    full_path: str,
    store: DocumentStoreProto = Depends(get_store),
) -> HTMLResponse:
    """
    Catch-all page: product list plus the caller's cart, rendered from a
    snapshot of the cart state. Must be registered after every API router.

    Read-only towards sessions: a visitor without a known cookie sees an
    empty cart, and the session is allocated by the first cart call.
    """
    cart = get_cart_sessions().get(request.cookies.get(settings.cart_cookie_name))
    state = cart.get_state() if cart is not None else INITIAL_STATE
    products = await product_service.list_products(store)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.store_title,
            "products": products,
            "cart": state.snapshot(),
            "bundle_url": "/static/js/bundle.js",
        },
    )
