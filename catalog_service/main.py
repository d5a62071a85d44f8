"""
Catalog Service Application

Authority for product existence, price and stock.
Serves the catalog validation protocol to checkout orchestration.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.handlers import register_error_handlers

from .core.config import Settings, get_settings
from .database.products import ProductDatabase, ProductRepository
from .routes import catalog_router
from .services.validation import CatalogValidationService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    products: Optional[ProductRepository] = None,
) -> FastAPI:
    """Build the catalog application around a product repository"""
    settings = settings or get_settings()
    products = products if products is not None else ProductDatabase(
        logger=logging.getLogger("catalog_service.products")
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info("Catalog Service starting up...")
        if isinstance(products, ProductDatabase):
            logger.info(f"Loaded {len(products.get_all_products())} products")
        yield
        logger.info("Catalog Service shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="Product validation authority for cart checkout",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.validation_service = CatalogValidationService(
        products,
        logger=logging.getLogger("catalog_service.validation"),
        lookup_timeout=settings.lookup_timeout,
    )

    register_error_handlers(app)
    app.include_router(catalog_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "catalog-service"}

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "catalog_service.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
