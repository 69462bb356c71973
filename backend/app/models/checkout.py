"""
Checkout order model
"""
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from app.core.database import Base
from sqlalchemy import JSON, Column, DateTime, Float, Index, String, Uuid


class CheckoutOrder(Base):
    """
    Order placed through the checkout endpoint

    `items` and `total_amount` are stored exactly as submitted; the total is
    not recomputed from the items.
    """
    __tablename__ = "checkouts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    # Customer and shipping address
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    address = Column(String(500), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(255), nullable=True)
    country = Column(String(255), nullable=False)
    zip = Column(String(32), nullable=False)

    # Ordered list of {"productId": str, "quantity": number}
    items = Column(JSON, nullable=False, default=lambda: [])
    total_amount = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    __table_args__ = (
        Index('idx_checkouts_created_at', 'created_at'),
    )

    def __repr__(self):
        return f"<CheckoutOrder(id={self.id}, email='{self.email}', total_amount={self.total_amount})>"

    @property
    def shipping_address(self) -> str:
        """Single-line address; an absent state is left out"""
        parts = [self.address, self.city, self.state, self.zip]
        return ", ".join(part for part in parts if part)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "name": self.name,
            "email": self.email,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "zip": self.zip,
            "items": list(self.items or []),
            "totalAmount": self.total_amount,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
