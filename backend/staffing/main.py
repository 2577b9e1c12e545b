"""
Staffing API - Main Application Entry Point

This module initializes the FastAPI application with:
- Logging configured from settings
- Database schema initialization
- CORS middleware for frontend communication
- Prometheus metrics middleware and /metrics endpoint
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup)
    ├── CORS Middleware
    ├── Prometheus Middleware
    └── API Router (/api)
        ├── /projects, /positions - Project and position records
        ├── /employees, /experience - Employee records
        └── /search - Employee matching
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from staffing.api import api_router
from staffing.config import get_settings
from staffing.database import init_db
from staffing.middleware import setup_metrics

settings = get_settings()


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Configure logging
        2. Initialize database tables

    Yields:
        Control to the application during its runtime
    """
    configure_logging()
    await init_db()
    logging.getLogger(__name__).info(
        f"Staffing API started (keyword recompute mode: {settings.keyword_recompute_mode})"
    )
    yield


app = FastAPI(
    title="Staffing API",
    description="Project staffing records and employee matching",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_metrics(app)
app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
