"""
Mail Infrastructure
===================

Async SMTP client for outbound notification email.

The client is constructed once at application startup (only when SMTP
credentials are configured) and handed to the notification module, which
wraps it behind its own transport interface.
"""

import time
from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from servicedesk.config import settings
from servicedesk.core import ConfigurationException, TransportException
from servicedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class SMTPMailClient:
    """
    Thin async wrapper around ``aiosmtplib.send``.

    One connection per message; no pooling and no retry.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        start_tls: Optional[bool] = None,
        timeout: Optional[float] = None
    ):
        self._host = host or settings.smtp_host
        self._port = port or settings.smtp_port
        self._username = username or settings.smtp_user
        self._password = password or settings.smtp_password
        self._sender = sender or settings.mail_sender
        self._start_tls = settings.smtp_start_tls if start_tls is None else start_tls
        self._timeout = timeout or settings.smtp_timeout_seconds

        if not self._host:
            raise ConfigurationException("SMTP host not configured")
        if not (self._username and self._password):
            raise ConfigurationException("SMTP credentials not configured")

    @property
    def sender(self) -> str:
        return self._sender

    def build_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str
    ) -> EmailMessage:
        """Build a multipart/alternative message (plain text + HTML)."""
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    async def send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str
    ) -> None:
        """
        Deliver one message.

        Raises:
            TransportException: If the SMTP exchange fails or times out
        """
        message = self.build_message(to_address, subject, html_body, text_body)
        start_time = time.perf_counter()

        try:
            await aiosmtplib.send(
                message,
                hostname=self._host,
                port=self._port,
                username=self._username,
                password=self._password,
                start_tls=self._start_tls,
                timeout=self._timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            raise TransportException(f"SMTP delivery failed: {e}", {"to": to_address})

        logger.info(
            "Email sent",
            extra={
                "to": to_address,
                "subject": subject,
                "latency_ms": int((time.perf_counter() - start_time) * 1000)
            }
        )
