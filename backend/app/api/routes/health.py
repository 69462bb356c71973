"""
Health check endpoints
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.deps import get_record_store
from app.core.config import get_logging_settings
from app.core.errors import PersistenceError
from app.core.logging_config import LoggingConfig
from app.services.record_store import RecordStore

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness string"""
    return "Backend is running!"


@router.get("/api/some-endpoint")
async def api_health_check():
    """Confirms the API answers; no side effects"""
    return {"message": "API is working properly!"}


@router.get("/health/detailed")
def detailed_health_check(store: RecordStore = Depends(get_record_store)):
    """
    Detailed health check with component status

    Returns:
        200 when the record store answers, 503 otherwise
    """
    settings = get_logging_settings()
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.app_name,
        "environment": settings.app_env,
        "components": {}
    }

    try:
        store.ping()
        health_status["components"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except PersistenceError as e:
        logger.warning("Database health check failed", exc_info=True)
        health_status["status"] = "unhealthy"
        health_status["components"]["database"] = {
            "status": "unhealthy",
            "message": "Database connection failed",
            "error": type(e.__cause__ or e).__name__
        }
        return JSONResponse(status_code=503, content=health_status)

    return health_status
