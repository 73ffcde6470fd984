"""
FastAPI Main Application

Entry point for the SMS parser API.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sms_parser import get_settings

from .routes import messages_router, merchants_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        f"Starting SMS Parser API (min_confidence={settings.min_confidence}, "
        f"quarantine_threshold={settings.quarantine_threshold})"
    )
    yield
    logger.info("Shutting down SMS Parser API...")


app = FastAPI(
    title="SMS Parser API",
    description="Turns bank and wallet SMS alerts into structured transactions",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS configuration
cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(messages_router, prefix="/api")
app.include_router(merchants_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "SMS Parser API",
        "version": "1.0.0",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "endpoints": {
            "validate": "/api/messages/validate",
            "parse": "/api/messages/parse",
            "capture": "/api/messages/capture",
            "resolve_merchant": "/api/merchants/resolve",
            "learn_alias": "/api/merchants/aliases",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=os.getenv("ENVIRONMENT", "development") == "development",
    )
