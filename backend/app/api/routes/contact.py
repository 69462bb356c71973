"""
Contact form endpoint
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from app.api.deps import get_contact_handler
from app.api.validators import number_as_text
from app.core.errors import DeliveryError, ValidationError
from app.core.logging_config import LoggingConfig
from app.services.contact_handler import ContactHandler

router = APIRouter(prefix="/api", tags=["contact"])
logger = LoggingConfig.get_logger(__name__)

FAILURE_MESSAGE = "Error submitting contact form"


class ContactRequest(BaseModel):
    """Contact form payload; presence is checked by the handler"""
    name: Optional[str] = Field(None, description="Sender name")
    email: Optional[str] = Field(None, description="Sender email address")
    message: Optional[str] = Field(None, description="Message text")

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def numbers_as_text(cls, value):
        return number_as_text(value)


@router.post("/contact")
def submit_contact(
    payload: Optional[ContactRequest] = None,
    handler: ContactHandler = Depends(get_contact_handler),
):
    """Store a contact submission and notify the operator"""
    payload = payload or ContactRequest()
    try:
        handler.submit(payload.name, payload.email, payload.message)
    except ValidationError as e:
        logger.info("Contact submission rejected", extra={"missing_fields": e.fields})
        return JSONResponse(status_code=400, content={"message": "All fields are required"})
    except DeliveryError as e:
        logger.warning(
            "Contact submission stored but notification failed",
            exc_info=True,
            extra={"record_id": str(e.record_id), "step": e.step}
        )
        return JSONResponse(status_code=500, content={"message": FAILURE_MESSAGE})
    except Exception as e:
        logger.error(
            f"Error submitting contact form: {e}",
            exc_info=True,
            extra={"step": getattr(e, "step", "unknown")}
        )
        return JSONResponse(status_code=500, content={"message": FAILURE_MESSAGE})

    return {"message": "Contact form submitted successfully"}
