"""Health check routes"""

from fastapi import APIRouter, Request
import logging

from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("pizzeria.api.health")


@router.get("/health-check")
def health_check(request: Request):
    """Basic health check endpoint with a database ping"""
    database = getattr(request.app.state, "database", None)
    db_ok = database.health_check() if database is not None else False
    if not db_ok:
        logger.warning("Health check: database not reachable")
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "database": "ok" if db_ok else "unavailable",
    }
