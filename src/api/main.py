"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from pymongo.database import Database

# Load environment variables from .env file
load_dotenv()

# Add src to path
# main.py is at /app/src/api/main.py
# src is at /app/src, so we go up 2 levels
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import auth, health, pages, register
from api.middleware.route_guard import RouteGuardMiddleware
from adapter.mongodb.connection import ping
from api.dependencies import connect_database
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import StorageError
from services.session_service import SessionTokenIssuer
from utils.config import get_cors_origins, get_jwt_secret_key
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Storefront Auth API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the MongoDB client for the life of the process.

    A database passed to create_app() is used as-is and left open. An
    unreachable server does not stop startup: the driver reconnects on
    demand, and a client that could not be built is retried on first use.
    """
    if app.state.db is None:
        try:
            connect_database(app.state)
        except StorageError:
            logger.warning("MongoDB client unavailable at startup, retrying on first use")

    if app.state.db is None or not ping(app.state.db):
        logger.warning("MongoDB unreachable, skipping index creation")
    elif MongoUserRepository(app.state.db).ensure_indexes():
        logger.info("MongoDB indexes verified/created successfully")
    else:
        logger.warning("Failed to create some MongoDB indexes")

    try:
        yield  # App runs here
    finally:
        client = app.state.mongo_client
        if client is not None:
            client.close()
            app.state.mongo_client = None
            app.state.db = None
            logger.info("MongoDB client closed")


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Answer store outages with a generic 500; details stay in the log."""
    logger.error("Storage failure", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    db: Optional[Database] = None,
    session_issuer: Optional[SessionTokenIssuer] = None,
) -> FastAPI:
    """Build the application.

    Args:
        db: database to use instead of connecting from MONGODB_URI at startup
        session_issuer: token issuer; defaults to one signed with JWT_SECRET_KEY
    """
    app = FastAPI(
        title=SERVICE_NAME,
        description="Registration, login and CMS access control for the storefront",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.db = db
    app.state.mongo_client = None
    app.state.session_issuer = session_issuer or SessionTokenIssuer(get_jwt_secret_key())

    app.add_exception_handler(StorageError, storage_error_handler)

    app.add_middleware(RouteGuardMiddleware, session_issuer=app.state.session_issuer)

    # Credentials (the session cookie) cannot be combined with a wildcard origin
    cors_origins = get_cors_origins()
    if cors_origins == "*":
        allow_credentials = False
        logger.warning(
            "CORS configured with wildcard origin ('*'). "
            "For production, set CORS_ORIGINS to specific domains (e.g., 'https://shop.example.com')"
        )
    else:
        allow_credentials = True
        logger.info(f"CORS configured with specific origins: {cors_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if isinstance(cors_origins, list) else [cors_origins],
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes; pages last so /{locale} does not shadow the API
    app.include_router(health.router)
    app.include_router(register.router)
    app.include_router(auth.router)
    app.include_router(pages.router)

    return app


if __name__ == "__main__":
    import uvicorn

    setup_structured_logging()
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        create_app(),
        host="0.0.0.0",
        port=port,
        access_log=False  # Application logs already go through structured logging
    )
