# fittrack/middleware/db_middleware.py
"""
Lazy Database Connection Middleware.

Startup may come up before MongoDB does; the first request that needs
storage connects instead. While MongoDB stays unreachable, workout and
user requests get a 503 in the usual ``{"error": ...}`` shape.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from database import Database

logger = logging.getLogger(__name__)

# Paths served without touching MongoDB
OPEN_PATHS = {"/", "/health", "/health/detailed", "/docs", "/redoc", "/openapi.json"}


class LazyDatabaseMiddleware(BaseHTTPMiddleware):
    """Connects Beanie on demand and short-circuits when storage is down."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in OPEN_PATHS or Database._initialized:
            return await call_next(request)

        try:
            logger.info(f"Connecting to MongoDB for {request.method} {request.url.path}")
            await Database.connect_db()
        except Exception as e:
            logger.error(f"MongoDB unavailable: {e}")
            return JSONResponse(
                status_code=503,
                content={"error": "Database unavailable, please retry shortly"},
            )

        return await call_next(request)
