"""
Train Ticketing Service API - Main Application.

FastAPI application with CORS enabled for frontend communication.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from api.config import Settings
from api.dependencies import build_ticketing_service
from api.errors import register_exception_handlers

settings = Settings.from_env()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the ticketing service once per process."""
    logger.info("Starting Train Ticketing Service (store=%s)", settings.receipt_store)
    app.state.ticketing_service = build_ticketing_service(settings)
    yield
    logger.info("Train Ticketing Service stopped")


# Create FastAPI application
app = FastAPI(
    title="Train Ticketing Service API",
    description="REST API for purchasing London to France train tickets and managing receipts",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "train-ticketing-service"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Train Ticketing Service API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import trains

app.include_router(trains.router, prefix="/api/trains", tags=["Trains"])
