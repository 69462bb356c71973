"""
Checkout endpoint
"""
from typing import List, Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.api.deps import get_checkout_handler
from app.api.validators import number_as_text
from app.core.errors import DeliveryError
from app.core.logging_config import LoggingConfig
from app.services.checkout_handler import CheckoutHandler

router = APIRouter(prefix="/api", tags=["checkout"])
logger = LoggingConfig.get_logger(__name__)

FAILURE_MESSAGE = "Checkout failed. Try again."


class OrderItem(BaseModel):
    """One cart line"""
    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[str] = Field(None, alias="productId")
    quantity: Optional[Union[int, float]] = None

    @field_validator("product_id", mode="before")
    @classmethod
    def numbers_as_text(cls, value):
        return number_as_text(value)


class CheckoutRequest(BaseModel):
    """
    Checkout payload

    Every field is optional here; the record store decides what is required.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    items: Optional[List[OrderItem]] = None
    total_amount: Optional[float] = Field(None, alias="totalAmount")

    @field_validator("name", "email", "address", "city", "state", "country", "zip", mode="before")
    @classmethod
    def numbers_as_text(cls, value):
        return number_as_text(value)


@router.post("/checkout", status_code=201)
def checkout(
    payload: Optional[CheckoutRequest] = None,
    handler: CheckoutHandler = Depends(get_checkout_handler),
):
    """Store an order and send the confirmation email to the customer"""
    payload = payload or CheckoutRequest()
    items = None
    if payload.items is not None:
        items = [item.model_dump(by_alias=True, exclude_none=True) for item in payload.items]

    try:
        handler.place_order(
            name=payload.name,
            email=payload.email,
            address=payload.address,
            city=payload.city,
            state=payload.state,
            country=payload.country,
            zip=payload.zip,
            items=items,
            total_amount=payload.total_amount,
        )
    except DeliveryError as e:
        logger.warning(
            "Order stored but confirmation email failed",
            exc_info=True,
            extra={"record_id": str(e.record_id), "step": e.step}
        )
        return JSONResponse(status_code=500, content={"message": FAILURE_MESSAGE})
    except Exception as e:
        logger.error(
            f"Checkout error: {e}",
            exc_info=True,
            extra={"step": getattr(e, "step", "unknown")}
        )
        return JSONResponse(status_code=500, content={"message": FAILURE_MESSAGE})

    return {"message": "Order placed successfully! Email sent."}
