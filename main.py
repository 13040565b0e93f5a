"""
Scheduling Poll API - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from datepoll.core.config import settings
from datepoll.core.db import engine, Base
from datepoll.core.errors import ErrorKind, ServiceError
from datepoll.api import routes_owner, routes_participant, routes_public
from datepoll.utils.responses import error_response, service_error_response
import datepoll.models  # noqa: F401  registers tables on Base.metadata

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Scheduling Poll API",
    description="Create date polls, collect availability and find the best time to meet",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def no_store_headers(request: Request, call_next):
    """Edit links carry bearer tokens; keep responses out of caches and indexes"""
    response = await call_next(request)
    response.headers["X-Robots-Tag"] = "noindex, nofollow"
    response.headers["Cache-Control"] = "no-store"
    return response

@app.exception_handler(ServiceError)
async def handle_service_error(request: Request, exc: ServiceError):
    return service_error_response(exc, locale=request.query_params.get("locale"))

@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    return error_response(
        ErrorKind.INVALID_REQUEST,
        locale=request.query_params.get("locale"),
        status_code=400
    )

@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        ErrorKind.INTERNAL,
        locale=request.query_params.get("locale"),
        status_code=500
    )

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_participant.router, tags=["participant"])
app.include_router(routes_owner.router, tags=["owner"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
