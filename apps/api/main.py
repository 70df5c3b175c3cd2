"""
PetraPanel Workflow - FastAPI Backend
Main application entry point with health check and workflow routing.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import configure_logging, settings
from routers import health, workflow
from workflow.policy import DEFAULT_POLICY, validate_policy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    configure_logging()
    logger.info("Starting %s %s", settings.APP_NAME, settings.APP_VERSION)
    if settings.VALIDATE_POLICY_ON_STARTUP:
        validate_policy(DEFAULT_POLICY)
        logger.info("Workflow policy verified.")
    yield
    logger.info("Shutting down %s", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    description="Role-gated video production workflow decisions",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(workflow.router, prefix="/workflow", tags=["Workflow"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }
