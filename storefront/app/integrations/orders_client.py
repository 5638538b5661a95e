from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from storefront.app.core.errors import OrderSinkError
from storefront.app.models.order import Order, OrderIn

logger = logging.getLogger(__name__)


class HttpOrderSink:
    """POSTs checkout orders to a remote ``/orders`` endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self.url = f"{base_url.rstrip('/')}/orders"
        self._client = client
        self._timeout = timeout

    async def _post(self, client: httpx.AsyncClient, payload: Dict[str, Any]) -> httpx.Response:
        r = await client.post(self.url, json=payload)
        r.raise_for_status()
        return r

    async def submit(self, order: OrderIn) -> Dict[str, Any]:
        payload = order.model_dump()
        try:
            if self._client is not None:
                r = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    r = await self._post(client, payload)
        except httpx.HTTPError as exc:
            logger.warning("order POST %s failed: %s", self.url, exc)
            raise OrderSinkError(f"orders API error: {exc}") from exc
        try:
            return Order.model_validate(r.json()).model_dump()
        except ValidationError as exc:
            raise OrderSinkError(f"orders API returned an invalid order: {exc.error_count()} error(s)") from exc
        except ValueError as exc:
            raise OrderSinkError("orders API returned a non-JSON body") from exc
