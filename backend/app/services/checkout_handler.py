"""
Checkout handler: persist the order -> confirm by email to the customer
"""
from typing import Any, Dict, List, Optional

from app.core.errors import DeliveryError
from app.core.logging_config import LoggingConfig
from app.core.metrics import notifications_total
from app.models.checkout import CheckoutOrder
from app.services.email_templates import render_order_confirmation
from app.services.notifier import Notifier
from app.services.record_store import RecordStore

logger = LoggingConfig.get_logger(__name__)


class CheckoutHandler:
    """
    Places orders

    Fields are passed to the store unchecked: required-field enforcement is
    the store schema's job, and `total_amount` is taken as submitted.
    """

    def __init__(self, store: RecordStore, notifier: Notifier):
        self.store = store
        self.notifier = notifier

    def place_order(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        country: Optional[str] = None,
        zip: Optional[str] = None,
        items: Optional[List[Dict[str, Any]]] = None,
        total_amount: Optional[float] = None,
    ) -> CheckoutOrder:
        """
        Handle one checkout

        Raises:
            PersistenceError: the store rejected or failed to write the order
            DeliveryError: the order was stored but the confirmation failed
                (`record_id` is set on the error)
        """
        order = self.store.save(CheckoutOrder(
            name=name,
            email=email,
            address=address,
            city=city,
            state=state,
            country=country,
            zip=zip,
            items=list(items or []),
            total_amount=total_amount,
        ))
        logger.info(
            "Order stored",
            extra={"record_id": str(order.id), "item_count": len(order.items)}
        )

        rendered = render_order_confirmation(order)
        try:
            self.notifier.send(order.email, rendered.subject, rendered.body)
        except DeliveryError as e:
            notifications_total.labels(template=rendered.template, status="failed").inc()
            e.record_id = order.id
            raise
        notifications_total.labels(template=rendered.template, status="sent").inc()

        return order
