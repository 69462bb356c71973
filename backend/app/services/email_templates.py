"""
Email template rendering
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from app.models.checkout import CheckoutOrder
from app.models.contact import ContactSubmission

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

CONTACT_SUBJECT = "New Contact Form Submission"
ORDER_CONFIRMATION_SUBJECT = "Order Confirmation - Your Purchase was Successful!"

jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    undefined=StrictUndefined,
)


@dataclass(frozen=True)
class RenderedEmail:
    template: str
    subject: str
    body: str


def format_amount(amount: Optional[float]) -> str:
    """Two decimal places, as shown to customers"""
    if amount is None:
        return ""
    return f"{amount:.2f}"


def render_contact_notification(submission: ContactSubmission) -> RenderedEmail:
    """Operator notification echoing the submitted contact form"""
    body = jinja_env.get_template("contact_notification.html").render(
        name=submission.name,
        email=submission.email,
        message=submission.message,
    )
    return RenderedEmail(template="contact_notification", subject=CONTACT_SUBJECT, body=body)


def render_order_confirmation(order: CheckoutOrder) -> RenderedEmail:
    """Customer confirmation with total and shipping address"""
    body = jinja_env.get_template("order_confirmation.html").render(
        name=order.name,
        total_amount=format_amount(order.total_amount),
        shipping_address=order.shipping_address,
    )
    return RenderedEmail(template="order_confirmation", subject=ORDER_CONFIRMATION_SUBJECT, body=body)
