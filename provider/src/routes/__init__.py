from provider.src.routes.health import router as health_router
from provider.src.routes.pipelines import router as pipelines_router
from provider.src.routes.schema import router as schema_router

__all__ = ["health_router", "pipelines_router", "schema_router"]
