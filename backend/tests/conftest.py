"""
Pytest configuration and fixtures
"""
import os
import sys
from pathlib import Path

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Test configuration must be in place before app modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_USER", "operator@example.com")
os.environ.setdefault("EMAIL_PASS", "test-password")
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ.setdefault("LOG_FORMAT", "text")

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.core.errors import DeliveryError
from app.services.notifier import Notifier
from app.services.record_store import RecordStore


class RecordingNotifier(Notifier):
    """Notifier double: records messages, optionally fails every send"""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise DeliveryError(f"Failed to send '{subject}' to {to}: relay unavailable")
        self.sent.append({"to": to, "subject": subject, "body": body})


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite engine shared by every thread of one test"""
    import app.models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db(session_factory) -> Session:
    """Create a database session for assertions"""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def store(session_factory) -> RecordStore:
    return RecordStore(session_factory)


@pytest.fixture(scope="function")
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(scope="function")
def client(store, notifier):
    """Create test client with store and notifier dependency overrides"""
    from fastapi.testclient import TestClient

    from app.api.deps import get_notifier, get_record_store
    from main import app

    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def fresh_settings():
    """Drop cached settings before and after a test that edits the environment"""
    from app.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
