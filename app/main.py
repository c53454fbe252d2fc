# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# Main entry point for the CollegeMate API.
# Configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    CollegeMateException,
    application_error_handler,
    collegemate_exception_handler,
)
from app.routers import admin, health, purchases, resources, reviews, samples, wishlist
from lib.supabase_client import SupabaseClientError
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup configuration and shutdown."""
    logger.info(f"Starting CollegeMate API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Storage buckets: {settings.bucket_names}")

    yield

    logger.info("Shutting down CollegeMate API")


app = FastAPI(
    title="CollegeMate API",
    description="""
## Student Resource Marketplace API

Students buy and sell study material: lecture notes, syllabi and previous
year question papers.

### Flow

1. **Sign up / sign in** - Supabase Auth issues the access token
2. **Browse** - Filter by category, subject, semester, year, branch and price
3. **Buy** - Free resources unlock immediately, paid ones after payment
4. **Download & review** - Rate what you bought
5. **Upload** - Uploaders publish material after admin approval
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Sign up, sign in and profile management"},
        {"name": "Resources", "description": "Browse, upload and download resources"},
        {"name": "Purchases", "description": "Mock checkout and purchase history"},
        {"name": "Reviews", "description": "Ratings and reviews"},
        {"name": "Wishlist", "description": "Saved resources"},
        {"name": "Admin", "description": "Moderation and sales dashboard"},
        {"name": "Samples", "description": "Bundled demo catalog"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CollegeMateException)
async def handle_collegemate_exception(request: Request, exc: CollegeMateException):
    return await collegemate_exception_handler(request, exc)


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    return await application_error_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_error(request: Request, exc: SupabaseClientError):
    logger.error(f"Supabase error on {request.url.path}: {exc}")
    return await application_error_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(auth_routes.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(resources.router, prefix="/api/v1/resources", tags=["Resources"])
app.include_router(reviews.router, prefix="/api/v1", tags=["Reviews"])
app.include_router(purchases.router, prefix="/api/v1/purchases", tags=["Purchases"])
app.include_router(wishlist.router, prefix="/api/v1/wishlist", tags=["Wishlist"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])
app.include_router(samples.router, prefix="/api/v1", tags=["Samples"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "CollegeMate API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
