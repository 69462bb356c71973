"""
Prometheus metrics endpoint
"""
from fastapi import APIRouter
from fastapi.responses import Response

from app.core.logging_config import LoggingConfig
from app.core.metrics import get_metrics, get_metrics_content_type

logger = LoggingConfig.get_logger(__name__)

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
async def metrics():
    """Request, record store and notification metrics in Prometheus text format"""
    try:
        return Response(content=get_metrics(), media_type=get_metrics_content_type())
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return Response(
            content="# Error generating metrics\n",
            media_type="text/plain",
            status_code=500
        )
