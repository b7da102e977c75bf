# app/routes/health.py
"""
Health check endpoint.
"""

from fastapi import APIRouter

from app.config import settings

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": settings.SERVICE_NAME}
