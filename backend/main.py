"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import checkout, contact, health, metrics
from app.core.config import get_settings
from app.core.database import dispose_engine, get_session_local
from app.core.errors import PersistenceError
from app.core.logging_config import LoggingConfig
from app.core.middleware import LoggingContextMiddleware
from app.core.middleware_metrics import MetricsMiddleware
from app.services.notifier import SmtpNotifier
from app.services.record_store import RecordStore

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the record store and build the notifier; both live for the whole process"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")

    store = RecordStore(get_session_local())
    try:
        store.ping()
        store.create_schema()
    except PersistenceError:
        logger.critical("Database connection error", exc_info=True)
        dispose_engine()
        raise
    logger.info("Connected to database")

    app.state.record_store = store
    app.state.notifier = SmtpNotifier.from_settings(settings)
    logger.info(f"Server running on port {settings.port}")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    dispose_engine()


# Raises StartupConfigurationError when required settings are missing
_settings = get_settings()
app = FastAPI(
    title=_settings.app_name,
    description="Contact form and checkout backend",
    version="0.1.0",
    lifespan=lifespan,
)

# Add logging context middleware (before CORS to capture all requests)
app.add_middleware(LoggingContextMiddleware)
app.add_middleware(MetricsMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins_list,
    allow_credentials="*" not in _settings.allowed_origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request bodies that cannot be decoded get the endpoint's generic failure message
REQUEST_FAILURE_MESSAGES = {
    "/api/contact": contact.FAILURE_MESSAGE,
    "/api/checkout": checkout.FAILURE_MESSAGE,
}


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Undecodable request body; the caller never sees the validation detail"""
    logger.warning(
        "Request body rejected",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(exc.errors()),
        }
    )
    message = REQUEST_FAILURE_MESSAGES.get(request.url.path, "Internal server error")
    return JSONResponse(status_code=500, content={"message": message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled errors; callers get a generic message only"""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        }
    )

    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.include_router(health.router)
app.include_router(contact.router)
app.include_router(checkout.router)
app.include_router(metrics.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.app_env == "development",
    )
