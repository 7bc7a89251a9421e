"""FastAPI application entry point."""
from fastapi import FastAPI

from .config import settings
from .container import container
from .routes import scheduler
from .utils.logger import logger

# Create FastAPI app
app = FastAPI(
    title="Gym Enricher API",
    description="Scheduled multi-source enrichment of gym location data",
    version="1.0.0",
    debug=settings.debug,
)

# Include routers
app.include_router(scheduler.router)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy", "service": "gym-enricher"}


# Startup event
@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Starting Gym Enricher API")
    logger.info(f"Gym store: {settings.store_path}")
    container.auto_initialize()


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("Shutting down Gym Enricher API")
    container.stop()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gym_enricher.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info",
    )
