"""
Buildkite pipeline provider - host-facing entry point.
"""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from provider.src.config import get_settings
from provider.src.routes import health_router, pipelines_router, schema_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Buildkite pipeline provider")
    logger.info(f"Buildkite organization: {settings.buildkite_organization or '(unset)'}")
    if not settings.buildkite_api_token:
        logger.warning("BUILDKITE_API_TOKEN is not set; API calls will be rejected")
    yield
    logger.info("Shutting down Buildkite pipeline provider")

app = FastAPI(
    title="Buildkite Pipeline Provider",
    description="Declarative Buildkite pipeline resource provider",
    version="0.1.0",
    lifespan=lifespan
)

# Include routers
app.include_router(health_router)
app.include_router(schema_router)
app.include_router(pipelines_router)

@app.get("/")
def root():
    return {
        "name": "buildkite-pipeline-provider",
        "version": "0.1.0",
        "docs": "/docs"
    }

def main():
    """Main entry point."""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)

if __name__ == "__main__":
    main()
