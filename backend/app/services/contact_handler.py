"""
Contact form handler: validate -> persist -> notify the operator
"""
from typing import Optional

from app.core.errors import DeliveryError, ValidationError
from app.core.logging_config import LoggingConfig
from app.core.metrics import notifications_total
from app.models.contact import ContactSubmission
from app.services.email_templates import render_contact_notification
from app.services.notifier import Notifier
from app.services.record_store import RecordStore

logger = LoggingConfig.get_logger(__name__)

REQUIRED_FIELDS = ("name", "email", "message")


class ContactHandler:
    """Stores contact submissions and forwards them to the operator's inbox"""

    def __init__(self, store: RecordStore, notifier: Notifier, operator_address: str):
        self.store = store
        self.notifier = notifier
        self.operator_address = operator_address

    def submit(
        self,
        name: Optional[str],
        email: Optional[str],
        message: Optional[str],
    ) -> ContactSubmission:
        """
        Handle one contact form submission

        Raises:
            ValidationError: a field is absent or empty; nothing was stored or sent
            PersistenceError: the store write failed; no email was attempted
            DeliveryError: the record was stored but the email failed
                (`record_id` is set on the error)
        """
        values = {"name": name, "email": email, "message": message}
        missing = [field for field in REQUIRED_FIELDS if not values[field]]
        if missing:
            raise ValidationError("All fields are required", fields=missing)

        submission = self.store.save(ContactSubmission(name=name, email=email, message=message))
        logger.info("Contact submission stored", extra={"record_id": str(submission.id)})

        rendered = render_contact_notification(submission)
        try:
            self.notifier.send(self.operator_address, rendered.subject, rendered.body)
        except DeliveryError as e:
            notifications_total.labels(template=rendered.template, status="failed").inc()
            e.record_id = submission.id
            raise
        notifications_total.labels(template=rendered.template, status="sent").inc()

        return submission
