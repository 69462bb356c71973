"""
Unified logging configuration with structured JSON logging, context support, and multiple handlers
"""
import json
import logging
import re
import sys
from contextvars import ContextVar
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from app.core.config import get_logging_settings

# Context variables for request context
request_context: ContextVar[Dict[str, Any]] = ContextVar('request_context', default={})

# Attributes every LogRecord carries; everything else came in through extra=
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
    'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'taskName',
])


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages"""

    SENSITIVE_PATTERNS = [
        (r'password["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'password": "***"'),
        (r'email_pass["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'email_pass": "***"'),
        (r'token["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'token": "***"'),
        (r'secret["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'secret": "***"'),
        (r'(\w+://[^:/\s]+):([^@\s]+)@', r'\1:***@'),
    ]

    def __init__(self, enabled: bool = True):
        super().__init__()
        self.enabled = enabled

    def _mask(self, text: str) -> str:
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask sensitive data"""
        if not self.enabled:
            return True

        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._mask(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True


class ContextualFormatter(logging.Formatter):
    """JSON formatter with request context support"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_dict = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
        }

        ctx = request_context.get({})
        if ctx:
            log_dict.update(ctx)

        if record.exc_info:
            log_dict['exception'] = self.formatException(record.exc_info)

        # Fields passed through extra= in logging calls
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value, default=str)
                log_dict[key] = value
            except (TypeError, ValueError):
                log_dict[key] = str(value)

        return json.dumps(log_dict, ensure_ascii=False, default=str)


class LoggingConfig:
    """Centralized logging configuration with structured logging support"""

    _configured = False
    _module_levels: Dict[str, str] = {}

    @classmethod
    def configure(cls, module_levels: Optional[Dict[str, str]] = None):
        """Configure logging for the application"""
        if cls._configured:
            return

        settings = get_logging_settings()

        sqlalchemy_level = "INFO" if settings.log_sqlalchemy else "WARNING"
        uvicorn_access_level = "INFO" if settings.log_uvicorn_access else "WARNING"

        default_levels = {
            "sqlalchemy.engine": sqlalchemy_level,
            "sqlalchemy.pool": "WARNING",
            "uvicorn.access": uvicorn_access_level,
            "uvicorn.error": "INFO",
            "app": settings.log_level,
            "root": settings.log_level,
        }

        if settings.log_module_levels:
            try:
                default_levels.update(json.loads(settings.log_module_levels))
            except (json.JSONDecodeError, TypeError):
                pass

        if module_levels:
            default_levels.update(module_levels)

        cls._module_levels = default_levels

        if settings.log_format.lower() == "json":
            formatter = ContextualFormatter(datefmt='%Y-%m-%d %H:%M:%S')
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        handlers = []

        # Console handler (always enabled)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(SensitiveDataFilter(enabled=not settings.log_sensitive_data))
        handlers.append(console_handler)

        if settings.log_file_enabled:
            log_path = Path(settings.log_file_path)
            # Resolve relative to project root
            if not log_path.is_absolute():
                _backend_dir = Path(__file__).resolve().parent.parent.parent
                log_path = _backend_dir.parent / log_path

            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = TimedRotatingFileHandler(
                filename=str(log_path),
                when='midnight',
                interval=1,
                backupCount=settings.log_file_retention,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            file_handler.addFilter(SensitiveDataFilter(enabled=not settings.log_sensitive_data))
            handlers.append(file_handler)

        root_level = default_levels.get("root", "INFO")
        logging.basicConfig(
            level=getattr(logging, root_level.upper()),
            handlers=handlers,
            force=True  # Override existing configuration
        )

        for module, level in default_levels.items():
            if module != "root":
                logger = logging.getLogger(module)
                logger.setLevel(getattr(logging, level.upper()))

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger for a module"""
        if not cls._configured:
            cls.configure()
        return logging.getLogger(name)

    @classmethod
    def get_module_level(cls, module: str) -> str:
        """Get logging level for a specific module"""
        return logging.getLevelName(logging.getLogger(module).level)

    @classmethod
    def set_context(cls, **kwargs):
        """Set context variables for logging"""
        ctx = request_context.get({}).copy()
        ctx.update(kwargs)
        request_context.set(ctx)

    @classmethod
    def clear_context(cls):
        """Clear context variables"""
        request_context.set({})


# Initialize on import
LoggingConfig.configure()
