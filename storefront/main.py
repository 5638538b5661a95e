# storefront/main.py
from __future__ import annotations

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from storefront.app.core.logging import setup_logging
from storefront.app.core.config import settings
from storefront.app.core.errors import StorefrontError
from storefront.app.services.document_store import reset_store

from storefront.app.api.routes_health import router as health_router
from storefront.app.api.routes_ui import router as ui_router
from storefront.routes.api_products import router as products_router
from storefront.routes.api_orders import router as orders_router
from storefront.routes.api_cart import router as cart_router
from storefront.routes.api_checkout import router as checkout_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if settings.store_backend.lower() == "redis":
        from storefront.app.core.redis_conn import close_async_redis
        await close_async_redis()
        reset_store()


def create_app() -> FastAPI:
    # Initialize logging early so all imports use correct handlers/levels
    setup_logging(settings)

    app = FastAPI(
        title=settings.service_name or "Storefront",
        version=settings.version or "0.1.0",
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Store/sink failures that escaped a handler: structured 500 instead of a bare one
    @app.exception_handler(StorefrontError)
    async def _storefront_error_to_json(request: Request, exc: StorefrontError):
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "detail": str(exc),
                "path": str(request.url),
                "method": request.method,
            },
        )

    @app.exception_handler(Exception)
    async def _unhandled_exc_to_json(request: Request, exc: Exception):
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        logger.error("Unhandled exception on %s %s\n%s", request.method, request.url.path, tb)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "detail": str(exc),
                "path": str(request.url),
                "method": request.method,
            },
        )

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins or ["*"],
        allow_credentials=True,
        allow_methods=settings.cors_allow_methods or ["*"],
        allow_headers=settings.cors_allow_headers or ["*"],
    )

    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(orders_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)

    # Static assets must be mounted before the catch-all page route
    if settings.static_root.is_dir():
        app.mount("/static", StaticFiles(directory=settings.static_root), name="static")
    else:
        logger.warning("static root %s missing; /static not served", settings.static_root)

    app.include_router(ui_router)

    logger.info(
        "%s %s ready (store=%s, clear_on_failure=%s)",
        settings.service_name,
        settings.version,
        settings.store_backend,
        settings.checkout_clear_on_failure,
    )
    return app


app = create_app()
