"""
Error taxonomy for the request pipeline and service startup
"""
from typing import List, Optional
from uuid import UUID


class StorefrontError(Exception):
    """Base class for all service errors"""
    pass


class StartupConfigurationError(StorefrontError):
    """Required configuration is missing or invalid; the process must not start"""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class HandlerError(StorefrontError):
    """
    Failure of one step of a handler's validate -> persist -> notify sequence

    `step` names the failed step so the route layer can choose the response.
    """
    step = "unknown"


class ValidationError(HandlerError):
    """Request payload is missing required fields"""
    step = "validation"

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class PersistenceError(HandlerError):
    """Record store write failed"""
    step = "persistence"


class RecordRejectedError(PersistenceError):
    """Record store refused a record that breaks its schema"""

    def __init__(self, kind: str, missing: List[str]):
        super().__init__(f"{kind} validation failed: missing required field(s) {', '.join(missing)}")
        self.kind = kind
        self.missing = missing


class DeliveryError(HandlerError):
    """Notification could not be delivered"""
    step = "delivery"

    def __init__(self, message: str, record_id: Optional[UUID] = None):
        super().__init__(message)
        # Set by handlers when the record was stored before delivery failed
        self.record_id = record_id
