# storefront/app/services/product_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from storefront.app.models.product import ProductIn
from storefront.app.services.document_store import DocumentStoreProto

logger = logging.getLogger(__name__)

COLLECTION = "products"


async def list_products(store: DocumentStoreProto) -> List[Dict[str, Any]]:
    """All products in the store's natural order. No filtering, no paging."""
    return await store.collection(COLLECTION).find()


async def get_product(store: DocumentStoreProto, product_id: str) -> Optional[Dict[str, Any]]:
    return await store.collection(COLLECTION).find_one(product_id)


async def create_product(store: DocumentStoreProto, product: ProductIn) -> Dict[str, Any]:
    # Name and price are stored as given; no sign or emptiness checks
    saved = await store.collection(COLLECTION).save(product.model_dump())
    logger.info("product created id=%s name=%r", saved["id"], saved["name"])
    return saved
