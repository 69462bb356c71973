"""
Contact form submission model
"""
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from app.core.database import Base
from sqlalchemy import Column, DateTime, Index, String, Text, Uuid


class ContactSubmission(Base):
    """
    Message left through the contact form

    Append-only: rows are inserted once and never updated or deleted.
    """
    __tablename__ = "contacts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)  # No format validation
    message = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    __table_args__ = (
        Index('idx_contacts_created_at', 'created_at'),
    )

    def __repr__(self):
        return f"<ContactSubmission(id={self.id}, email='{self.email}')>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
