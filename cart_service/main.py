"""
Cart Service Application

Session shopping carts held in a key-value store with a sliding TTL.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.catalog.client import CatalogClient
from shared.errors import CommerceError
from shared.handlers import register_error_handlers

from .core.config import Settings, get_settings
from .database.carts import SessionCartStore
from .database.kv import InMemoryKeyValueClient, KeyValueClient, RedisKeyValueClient
from .routes import cart_router

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def build_key_value_client(settings: Settings) -> KeyValueClient:
    """Backend selected by settings.kv_backend"""
    if settings.kv_backend == "memory":
        logger.warning("Using in-memory cart storage - carts are lost on restart")
        return InMemoryKeyValueClient()
    return RedisKeyValueClient.from_url(
        settings.redis_url,
        logger=logging.getLogger("cart_service.redis"),
    )


def create_app(
    settings: Optional[Settings] = None,
    cart_store: Optional[SessionCartStore] = None,
    catalog_client: Optional[CatalogClient] = None,
) -> FastAPI:
    """
    Build the cart application.

    Dependencies not passed in are created from settings.
    """
    settings = settings or get_settings()

    if cart_store is None:
        cart_store = SessionCartStore(
            build_key_value_client(settings),
            logger=logging.getLogger("cart_service.store"),
            ttl=settings.cart_ttl,
            timeout=settings.store_timeout,
        )

    if catalog_client is None and settings.catalog_base_url:
        catalog_client = CatalogClient(
            settings.catalog_base_url,
            timeout=settings.catalog_timeout,
            logger=logging.getLogger("cart_service.catalog"),
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info("Cart Service starting up...")
        logger.info(f"Cart backend: {settings.kv_backend}, TTL: {settings.cart_ttl}")
        logger.info(f"Catalog: {settings.catalog_base_url or 'not configured'}")
        yield
        logger.info("Cart Service shutting down...")
        await app.state.cart_store.kv.close()
        if app.state.catalog_client is not None:
            await app.state.catalog_client.close()

    app = FastAPI(
        title=settings.app_name,
        description="Session shopping carts",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["POST", "OPTIONS", "GET", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.cart_store = cart_store
    app.state.catalog_client = catalog_client

    register_error_handlers(app)
    app.include_router(cart_router)

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint; reads a cart to prove the store answers"""
        try:
            await request.app.state.cart_store.get("health-check")
        except CommerceError as e:
            logger.error(f"Health check failed: {e.kind}: {e.message}")
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "error": e.message},
            )
        return {"status": "healthy", "service": "cart-service"}

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "cart_service.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
