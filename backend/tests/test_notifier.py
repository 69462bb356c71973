"""
Tests for SmtpNotifier
"""
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from app.core.config import Settings
from app.core.errors import DeliveryError
from app.services.notifier import SmtpNotifier


@pytest.fixture
def smtp_notifier():
    return SmtpNotifier(
        host="smtp.example.com",
        port=465,
        username="shop@example.com",
        password="secret",
    )


@pytest.fixture
def smtp_ssl():
    """Patched SMTP_SSL class; `.client` is the connection used inside `with`"""
    with patch("app.services.notifier.smtplib.SMTP_SSL") as smtp_cls:
        smtp_cls.client = MagicMock()
        smtp_cls.return_value.__enter__.return_value = smtp_cls.client
        yield smtp_cls


def test_send_logs_in_and_sends_html(smtp_notifier, smtp_ssl):
    smtp_notifier.send("customer@example.com", "Hello", "<p>Hi &amp; welcome</p>")

    args, kwargs = smtp_ssl.call_args
    assert args == ("smtp.example.com", 465)
    assert kwargs["timeout"] == 30.0

    smtp_ssl.client.login.assert_called_once_with("shop@example.com", "secret")
    smtp_ssl.client.send_message.assert_called_once()

    message = smtp_ssl.client.send_message.call_args[0][0]
    assert message["To"] == "customer@example.com"
    assert message["From"] == "shop@example.com"
    assert message["Subject"] == "Hello"
    assert message.get_content_type() == "text/html"
    assert "<p>Hi &amp; welcome</p>" in message.get_content()


def test_sender_override(smtp_ssl):
    notifier = SmtpNotifier("smtp.example.com", 465, "shop@example.com", "secret", sender="noreply@example.com")
    notifier.send("customer@example.com", "Hello", "<p>Hi</p>")

    message = smtp_ssl.client.send_message.call_args[0][0]
    assert message["From"] == "noreply@example.com"


def test_authentication_failure_raises_delivery_error(smtp_notifier, smtp_ssl):
    smtp_ssl.client.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")

    with pytest.raises(DeliveryError) as exc_info:
        smtp_notifier.send("customer@example.com", "Hello", "<p>Hi</p>")

    assert isinstance(exc_info.value.__cause__, smtplib.SMTPAuthenticationError)
    smtp_ssl.client.send_message.assert_not_called()


def test_connection_failure_raises_delivery_error(smtp_notifier, smtp_ssl):
    smtp_ssl.side_effect = ConnectionRefusedError("connection refused")

    with pytest.raises(DeliveryError):
        smtp_notifier.send("customer@example.com", "Hello", "<p>Hi</p>")


def test_recipient_refused_raises_delivery_error(smtp_notifier, smtp_ssl):
    smtp_ssl.client.send_message.side_effect = smtplib.SMTPRecipientsRefused(
        {"customer@example.com": (550, b"no such user")}
    )

    with pytest.raises(DeliveryError):
        smtp_notifier.send("customer@example.com", "Hello", "<p>Hi</p>")


def test_missing_recipient_raises_without_connecting(smtp_notifier, smtp_ssl):
    with pytest.raises(DeliveryError):
        smtp_notifier.send("", "Hello", "<p>Hi</p>")

    smtp_ssl.assert_not_called()


def test_header_injection_in_recipient_raises_delivery_error(smtp_notifier, smtp_ssl):
    with pytest.raises(DeliveryError) as exc_info:
        smtp_notifier.send("a@x.com\r\nBcc: other@x.com", "Hello", "<p>Hi</p>")

    assert isinstance(exc_info.value.__cause__, ValueError)
    smtp_ssl.assert_not_called()


def test_starttls_when_ssl_disabled():
    notifier = SmtpNotifier("smtp.example.com", 587, "shop@example.com", "secret", use_ssl=False)

    with patch("app.services.notifier.smtplib.SMTP") as smtp_cls:
        client = smtp_cls.return_value
        client.__enter__.return_value = client
        notifier.send("customer@example.com", "Hello", "<p>Hi</p>")

    client.starttls.assert_called_once()
    client.login.assert_called_once_with("shop@example.com", "secret")
    client.send_message.assert_called_once()


def test_from_settings():
    settings = Settings(
        _env_file=None,
        database_url="sqlite://",
        email_user="shop@example.com",
        email_pass="secret",
        smtp_host="smtp.example.com",
        smtp_port=2525,
        smtp_use_ssl=False,
        smtp_timeout_seconds=5,
    )
    notifier = SmtpNotifier.from_settings(settings)

    assert notifier.host == "smtp.example.com"
    assert notifier.port == 2525
    assert notifier.username == "shop@example.com"
    assert notifier.password == "secret"
    assert notifier.sender == "shop@example.com"
    assert notifier.use_ssl is False
    assert notifier.timeout == 5
