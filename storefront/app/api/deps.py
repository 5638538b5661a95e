# storefront/app/api/deps.py
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request, Response

from storefront.app.core.config import settings
from storefront.app.services.cart_sessions import get_cart_sessions
from storefront.app.services.cart_state import CartStore


@dataclass
class CartSession:
    session_id: str
    cart: CartStore

    def attach(self, response: Response) -> None:
        """Set the session cookie on the outgoing response."""
        response.set_cookie(
            settings.cart_cookie_name,
            self.session_id,
            httponly=True,
            samesite="lax",
        )


def resolve_cart_session(request: Request) -> CartSession:
    sessions = get_cart_sessions()
    cookie = request.cookies.get(settings.cart_cookie_name)
    if sessions.get(cookie) is None:
        sessions.cleanup_inactive(settings.cart_session_ttl_minutes)
    sid, cart = sessions.get_or_create(cookie)
    return CartSession(session_id=sid, cart=cart)


async def cart_session(request: Request, response: Response) -> CartSession:
    """Dependency: the caller's cart, with the cookie refreshed on the response."""
    session = resolve_cart_session(request)
    session.attach(response)
    return session
