"""
Notifier: outbound email delivery
"""
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import Optional

from app.core.config import Settings
from app.core.errors import DeliveryError
from app.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)


class Notifier(ABC):
    """Sends an already rendered message; knows nothing about templates"""

    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> None:
        """
        Deliver an HTML message

        Raises:
            DeliveryError: the message could not be handed to the provider
        """


class SmtpNotifier(Notifier):
    """
    Notifier backed by an SMTP relay (Gmail by default)

    A new connection is opened for every message; the instance itself holds
    only configuration and is safe to share between requests.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: Optional[str] = None,
        use_ssl: bool = True,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.use_ssl = use_ssl
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpNotifier":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            sender=settings.sender_address,
            use_ssl=settings.smtp_use_ssl,
            timeout=settings.smtp_timeout_seconds,
        )

    def _build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body, subtype="html")
        return message

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)
        client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        client.starttls(context=context)
        return client

    def send(self, to: str, subject: str, body: str) -> None:
        if not to:
            raise DeliveryError(f"No recipients defined for '{subject}'")

        try:
            message = self._build_message(to, subject, body)
            with self._connect() as client:
                client.login(self.username, self.password)
                client.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            raise DeliveryError(f"Failed to send '{subject}' to {to}: {e}") from e

        logger.info("Email sent", extra={"subject": subject, "smtp_host": self.host})
