"""
Health check endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import DatabaseHealthCheck, get_db

router = APIRouter()

@router.get("/health")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.APP_VERSION
    }

@router.get("/health/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """Detailed health check"""
    database = DatabaseHealthCheck.check_connection(db)
    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "service": settings.PROJECT_NAME,
        "version": settings.APP_VERSION,
        "checks": {"database": database}
    }
