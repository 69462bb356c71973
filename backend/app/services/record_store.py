"""
Record Store: append-only persistence for contact submissions and checkout orders
"""
from datetime import datetime, timezone
from typing import List, TypeVar

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.database import Base
from app.core.errors import PersistenceError, RecordRejectedError
from app.core.logging_config import LoggingConfig
from app.core.metrics import record_store_errors_total, records_saved_total

logger = LoggingConfig.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=Base)


def missing_required_fields(record: Base) -> List[str]:
    """
    List the required attributes of `record` that hold no value

    A column is required when it is NOT NULL and has no default. Strings
    must also be non-empty.
    """
    missing = []
    for attr in inspect(type(record)).column_attrs:
        column = attr.columns[0]
        if column.nullable or column.primary_key:
            continue
        if column.default is not None or column.server_default is not None:
            continue
        value = getattr(record, attr.key)
        if value is None or (isinstance(value, str) and value == ""):
            missing.append(attr.key)
    return missing


class RecordStore:
    """
    Writes records through a SQLAlchemy session factory

    Each record kind maps to its own table. Only inserts are exposed.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def save(self, record: RecordT) -> RecordT:
        """
        Validate and insert a record

        Args:
            record: Unsaved model instance (ContactSubmission, CheckoutOrder)

        Returns:
            The stored record, detached, with `id` and `created_at` assigned

        Raises:
            RecordRejectedError: required fields are missing
            PersistenceError: the write failed
        """
        kind = record.__tablename__

        missing = missing_required_fields(record)
        if missing:
            record_store_errors_total.labels(kind=kind, error_type="RecordRejectedError").inc()
            raise RecordRejectedError(type(record).__name__, missing)

        if getattr(record, "created_at", None) is None:
            record.created_at = datetime.now(timezone.utc)

        session = self.session_factory()
        try:
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
        except SQLAlchemyError as e:
            session.rollback()
            record_store_errors_total.labels(kind=kind, error_type=type(e).__name__).inc()
            raise PersistenceError(f"Failed to save {kind} record: {e}") from e
        finally:
            session.close()

        records_saved_total.labels(kind=kind).inc()
        logger.debug("Record saved", extra={"kind": kind, "record_id": str(record.id)})
        return record

    def ping(self):
        """Check the database answers; raises PersistenceError if not"""
        session = self.session_factory()
        try:
            session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database is unreachable: {e}") from e
        finally:
            session.close()

    def create_schema(self):
        """Create missing tables for all registered models"""
        import app.models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.session_factory.kw["bind"])
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to create schema: {e}") from e
