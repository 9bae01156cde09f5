"""
TrainerMatch Platform - Main Application

FastAPI backend with:
- PostgreSQL for structured data (users, vendors, trainers, requirements...)
- MongoDB for documents
- Redis / RQ queue for notifications (see trainermatch.worker)
- JWT authentication with role gates

Run: uvicorn trainermatch.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from trainermatch.api.routes import api_router
from trainermatch.core.config import get_settings
from trainermatch.core.logging_config import setup_logging
from trainermatch.db.mongodb import close_mongo_client, init_mongo_indexes, test_mongo_connection
from trainermatch.db.postgres import dispose_engine, init_db, test_postgres_connection

settings = get_settings()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="TrainerMatch Platform",
    description="""
    Trainer / vendor matchmaking backend.

    ## Features
    - **Authentication**: JWT-based auth with role gates (SUPER_ADMIN, VENDOR_ADMIN, VENDOR_USER, TRAINER)
    - **Dashboard**: headline counts, 6-month match analytics, admin stats
    - **Requirements & Matches**: vendor requirements, scored matches, trainer alerts
    - **Proposals & Sessions**: trainer bids and scheduled sessions
    - **Documents**: document records and image uploads

    ## Databases
    - PostgreSQL: Structured data with declarative foreign keys
    - MongoDB: Document records
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")

# Uploaded images
app.mount(
    settings.upload_base_url,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads"
)


@app.on_event("startup")
async def startup_event():
    """Configure logging, create tables and MongoDB indexes."""
    setup_logging()
    init_db()
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)
    logger.info("TrainerMatch API started")


@app.on_event("shutdown")
async def shutdown_event():
    """Release pooled connections."""
    dispose_engine()
    close_mongo_client()


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    postgres_ok = test_postgres_connection()
    mongo_ok = test_mongo_connection()

    return {
        "status": "healthy" if postgres_ok and mongo_ok else "degraded",
        "postgres": "connected" if postgres_ok else "disconnected",
        "mongodb": "connected" if mongo_ok else "disconnected"
    }
