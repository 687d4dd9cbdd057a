"""Main FastAPI application for the power monitor dashboard."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.api.routers import dashboard, devices, thresholds
from src.config import AppConfig
from src.monitor.infrastructure.container import init_container
from src.monitor.infrastructure.logging import configure_structured_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    config = AppConfig()
    configure_structured_logging(
        level=config.logging.level,
        log_file=config.logging.file,
        rotation=config.logging.rotation,
        retention=config.logging.retention,
    )
    logger.info("🚀 Starting power monitor API...")

    container = init_container(config)
    container.threshold_store().load()
    logger.info("✓ Thresholds loaded")

    polling_loop = container.polling_loop()
    polling_loop.start()
    logger.info("✓ API ready")

    yield

    # Shutdown
    logger.info("🛑 Shutting down API...")
    await polling_loop.teardown()
    for resource in (container.reading_source(), container.device_directory()):
        close = getattr(resource, "close", None)
        if close is not None:
            close()
    logger.info("✓ Polling stopped and connections closed")


# Create FastAPI app
app = FastAPI(
    title="Power Monitor API",
    description="Live power-quality dashboard: device selection, alarms and chart data",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure as needed
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(dashboard.router)
app.include_router(thresholds.router)
app.include_router(devices.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Power Monitor API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    _config = AppConfig()
    uvicorn.run(app, host=_config.api.host, port=_config.api.port)
