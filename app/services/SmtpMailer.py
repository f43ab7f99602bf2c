"""SMTP relay client for outgoing website notifications."""

import logging
from email.errors import MessageError
from email.message import Message
from typing import Optional

import aiosmtplib

from app.core.config import settings
from app.core.errors import TransportError

logger = logging.getLogger(__name__)


class SmtpMailer:
    """
    Sends composed messages through a single SMTP relay.

    The relay is reached with STARTTLS on the submission port and, when a
    username is configured, an authenticated login. Every send opens its own
    connection; nothing is retried.
    """

    def __init__(
        self,
        hostname: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        start_tls: bool = True,
        timeout: float = 30.0,
    ):
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.start_tls = start_tls
        self.timeout = timeout

    def _connect(self) -> aiosmtplib.SMTP:
        return aiosmtplib.SMTP(
            hostname=self.hostname,
            port=self.port,
            use_tls=False,
            start_tls=self.start_tls,
            timeout=self.timeout,
        )

    async def send_message(self, message: Message) -> None:
        """
        Deliver ``message`` to the relay.

        Raises:
            TransportError: the relay refused the message, could not be
                reached, or the message could not be serialised.
        """
        try:
            async with self._connect() as smtp:
                if self.username:
                    await smtp.login(self.username, self.password or "")
                await smtp.send_message(message)
        except (aiosmtplib.SMTPException, OSError, MessageError, ValueError) as e:
            logger.error(f"❌ Failed to send email via {self.hostname}:{self.port}: {e}")
            logger.error(f"❌ Error details: {e.__class__.__name__}")
            raise TransportError(str(e)) from e

        logger.info(f"📨 Email sent via SMTP to {message['To']} (reply-to: {message['Reply-To'] or 'none'})")


def get_mailer() -> SmtpMailer:
    """Create the relay client from settings."""
    return SmtpMailer(
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USERNAME or None,
        password=settings.SMTP_PASSWORD or None,
        start_tls=settings.SMTP_START_TLS,
        timeout=settings.SMTP_TIMEOUT,
    )
