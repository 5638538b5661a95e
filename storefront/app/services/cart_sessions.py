# storefront/app/services/cart_sessions.py
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from storefront.app.services.cart_state import CartStore

logger = logging.getLogger(__name__)


class CartSessions:
    """In-memory registry of one CartStore per browser session."""

    def __init__(self) -> None:
        self._carts: Dict[str, CartStore] = {}
        self._last_access: Dict[str, datetime] = {}

    def __len__(self) -> int:
        return len(self._carts)

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_hex(16)

    def get(self, session_id: Optional[str]) -> Optional[CartStore]:
        if not session_id or session_id not in self._carts:
            return None
        self._last_access[session_id] = datetime.now()
        return self._carts[session_id]

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, CartStore]:
        """Return (session_id, cart); unknown or missing ids get a fresh empty cart."""
        cart = self.get(session_id)
        if cart is not None:
            return session_id, cart  # type: ignore[return-value]
        sid = session_id or self.new_session_id()
        cart = CartStore()
        self._carts[sid] = cart
        self._last_access[sid] = datetime.now()
        logger.info("new cart session: %s", sid[:8], extra={"session": sid[:8]})
        return sid, cart

    def cleanup_inactive(self, max_age_minutes: int = 60) -> int:
        """Drop carts untouched for longer than max_age_minutes; returns how many."""
        cutoff = datetime.now() - timedelta(minutes=max_age_minutes)
        stale = [sid for sid, seen in self._last_access.items() if seen < cutoff]
        for sid in stale:
            self._carts.pop(sid, None)
            self._last_access.pop(sid, None)
        if stale:
            logger.info("dropped %d inactive cart session(s)", len(stale))
        return len(stale)


_SESSIONS: Optional[CartSessions] = None


def get_cart_sessions() -> CartSessions:
    global _SESSIONS
    if _SESSIONS is None:
        _SESSIONS = CartSessions()
    return _SESSIONS


def reset_cart_sessions() -> None:
    global _SESSIONS
    _SESSIONS = None
