"""Main application entry point for the Threads API."""

import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables first
load_dotenv()

# Import routers and db
from routers.users import router as users_router
from db.connection import ensure_connected, close_client
from db.indexes import create_indexes
from modules.config import ConfigEnv

# Configure logging
logging.basicConfig(
    level=ConfigEnv.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI app.
    Handles startup and shutdown events.
    """
    logger.info("Starting up Threads API...")

    if not ConfigEnv.MONGODB_URL:
        logger.warning("MONGODB_URL not set - user actions will fail until it is configured")
    elif ConfigEnv.CREATE_INDEXES_ON_STARTUP:
        # Actions connect lazily; only index creation needs the connection up front
        db = await ensure_connected()
        await create_indexes(db)

    logger.info("✓ Startup complete")

    yield  # Application runs here

    logger.info("Shutting down Threads API...")
    close_client()
    logger.info("✓ Shutdown complete")


# Initialize FastAPI app with lifespan
app = FastAPI(
    title="Threads API",
    description="User profiles, user search, threads and activity feed",
    version="1.0.0",
    lifespan=lifespan,
)


# Include routers
app.include_router(users_router)


@app.get("/")
async def root():
    """Root endpoint for API health check."""
    return {
        "name": "Threads API",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "users_search": "GET /api/users?user_id=...&q=...&page=1&page_size=20",
            "users_put": "PUT /api/users/{user_id}",
            "users_get": "GET /api/users/{user_id}",
            "user_threads": "GET /api/users/{user_id}/threads",
            "user_activity": "GET /api/users/{user_id}/activity",
            "docs": "/docs"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="localhost", port=8000)
