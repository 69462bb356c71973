"""
Database configuration and session management
"""
import logging
import time
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import get_settings
from app.core.logging_config import LoggingConfig
from app.core.metrics import db_queries_total, db_query_duration_seconds

# Lazy initialization - don't create engine at module level
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None

# Base class for models (can be created immediately)
Base = declarative_base()


def _setup_db_metrics(engine: Engine):
    """Setup SQLAlchemy event listeners for database metrics"""

    @event.listens_for(engine, "before_cursor_execute")
    def receive_before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault('query_start_time', []).append(time.time())

    @event.listens_for(engine, "after_cursor_execute")
    def receive_after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        if conn.info.get('query_start_time'):
            duration = time.time() - conn.info['query_start_time'].pop()
            operation = statement.strip().split()[0].lower() if statement.strip() else "unknown"
            db_queries_total.labels(operation=operation).inc()
            db_query_duration_seconds.labels(operation=operation).observe(duration)


def build_engine(database_url: str, pool_size: int = 5, max_overflow: int = 10, echo: bool = False) -> Engine:
    """Create an engine for `database_url` with per-dialect connection options"""
    if database_url.startswith("sqlite"):
        # FastAPI runs sync routes in a thread pool
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 5},
        )
    else:
        engine = create_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,  # Verify connections before using
            echo=echo,
            connect_args={"connect_timeout": 5} if database_url.startswith("postgresql") else {},
        )
    _setup_db_metrics(engine)
    return engine


def get_engine() -> Engine:
    """Get or create database engine (lazy initialization)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        LoggingConfig.configure()

        _engine = build_engine(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            echo=settings.log_sqlalchemy,
        )

        sqlalchemy_logger = logging.getLogger("sqlalchemy.engine")
        if not settings.log_sqlalchemy:
            sqlalchemy_logger.setLevel(logging.WARNING)
            sqlalchemy_logger.propagate = False

    return _engine


def get_session_local() -> sessionmaker:
    """Get or create session factory (lazy initialization)"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def dispose_engine():
    """Close pooled connections and forget the engine"""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
