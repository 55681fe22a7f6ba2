import logging
from typing import Optional

from fastapi import FastAPI

from inventory_console.api.routes import (
    bulk,
    categories,
    dashboard,
    export,
    history,
    notifications,
    preferences,
    products,
    upload,
    view,
)
from inventory_console.api.websocket_route import router as websocket_router
from inventory_console.config import Settings, settings as default_settings
from inventory_console.state import InventoryState

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    if not logging.getLogger().handlers:
        # basic configuration if not already configured by the host
        logging.basicConfig(
            level=logging.DEBUG if settings.debug else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


def create_app(settings: Optional[Settings] = None, state: Optional[InventoryState] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="In-memory inventory console: products, categories, CSV import/export and audit trail",
        version="1.0.0",
        debug=settings.debug
    )
    app.state.inventory = state or InventoryState.from_settings(settings)

    # Include routers; bulk first so /bulk-delete is matched before /{product_id}
    app.include_router(bulk.router)
    app.include_router(products.router)
    app.include_router(view.router)
    app.include_router(upload.router)
    app.include_router(categories.router)
    app.include_router(history.router)
    app.include_router(export.router)
    app.include_router(dashboard.router)
    app.include_router(preferences.router)
    app.include_router(notifications.router)
    app.include_router(websocket_router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "docs": "/docs"}

    logger.info("%s ready with %d products", settings.app_name, len(app.state.inventory.products))
    return app


app = create_app()
