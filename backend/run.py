"""Run script with proper environment loading"""
import os
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent


def main():
    """Validate configuration, then serve the app; exits with status 1 on bad configuration"""
    if str(BACKEND_DIR) not in sys.path:
        sys.path.insert(0, str(BACKEND_DIR))
    os.chdir(BACKEND_DIR)

    from app.core.config import get_settings
    from app.core.errors import StartupConfigurationError
    from app.core.logging_config import LoggingConfig

    logger = LoggingConfig.get_logger("run")
    try:
        settings = get_settings()
    except StartupConfigurationError as e:
        logger.critical(f"Error: {e}", extra={"fields": e.fields})
        sys.exit(1)

    import uvicorn

    # Import app directly instead of using string to avoid path issues
    from main import app

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_config=None,  # keep LoggingConfig handlers
    )


if __name__ == "__main__":
    main()
