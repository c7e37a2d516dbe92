from app.api.routes.addresses import router as addresses_router
from app.api.routes.explorer import router as explorer_router
from app.api.routes.health import router as health_router

__all__ = ["addresses_router", "explorer_router", "health_router"]
