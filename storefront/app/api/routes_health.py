from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.app.core.config import settings
from storefront.app.services.document_store import DocumentStoreProto, get_store

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: DocumentStoreProto = Depends(get_store)):
    store_ok = await store.ping()
    return {
        "service": settings.service_name,
        "version": settings.version,
        "environment": settings.environment,
        "status": "ok" if store_ok else "degraded",
        "store": {
            "backend": store.backend,
            "ok": store_ok,
        },
        "checkout": {
            "clear_on_failure": settings.checkout_clear_on_failure,
            "remote_orders": settings.uses_remote_orders,
        },
    }
