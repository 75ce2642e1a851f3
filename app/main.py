"""Clicks Connector: FastAPI Application Entry Point.

Exposes Shorten.REST click analytics to a reporting host.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.database import init_db, test_connection
from app.api.connector_routes import router as connector_router
from app.core.logging import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("Clicks connector starting up...")
    if test_connection():
        try:
            init_db()
        except Exception as e:
            logger.error(f"Table creation failed: {e}")
    else:
        logger.error("Property store NOT connected; credential endpoints will fail")
    yield
    logger.info("Clicks connector shut down")


app = FastAPI(
    title="Shorten.REST Clicks Connector",
    description="Auth, schema and click rows from Shorten.REST for a reporting host.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(connector_router)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "clicks-connector",
        "version": "1.0.0",
    }
