"""
SQLAlchemy models
"""
from app.core.database import Base
from app.models.checkout import CheckoutOrder  # noqa: F401
from app.models.contact import ContactSubmission  # noqa: F401

__all__ = ["Base", "CheckoutOrder", "ContactSubmission"]
