# storefront/app/services/order_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from storefront.app.models.order import OrderIn
from storefront.app.services.document_store import DocumentStoreProto

logger = logging.getLogger(__name__)

COLLECTION = "orders"


async def create_order(store: DocumentStoreProto, order: OrderIn) -> Dict[str, Any]:
    """
    Persist products + total exactly as the caller sent them.
    The total is not recomputed and product ids are not looked up.
    """
    saved = await store.collection(COLLECTION).save(order.model_dump())
    logger.info(
        "order created id=%s lines=%d total=%s", saved["id"], len(saved["products"]), saved["total"],
        extra={"order_id": saved["id"]},
    )
    return saved


async def list_orders(store: DocumentStoreProto) -> List[Dict[str, Any]]:
    return await store.collection(COLLECTION).find()


async def get_order(store: DocumentStoreProto, order_id: str) -> Optional[Dict[str, Any]]:
    return await store.collection(COLLECTION).find_one(order_id)
