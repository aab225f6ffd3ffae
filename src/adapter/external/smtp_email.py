"""SMTP adapter implementing EmailSender.

Sends plain-text mail through a STARTTLS-capable relay. Transient
connection problems are retried before the send is reported as failed.
"""

import logging
import smtplib
from email.message import EmailMessage

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from domain.model.errors import EmailDeliveryError

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 10.0

_TRANSIENT_ERRORS = (smtplib.SMTPServerDisconnected, smtplib.SMTPConnectError, ConnectionError, TimeoutError)


class SmtpEmailSender:
    """EmailSender backed by smtplib."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        from_email: str = 'noreply@bootcamp.local',
        from_name: str = 'Bootcamp API',
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email
        self.from_name = from_name

    def _build(self, to: str, subject: str, message: str) -> EmailMessage:
        msg = EmailMessage()
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = to
        msg['Subject'] = subject
        msg.set_content(message)
        return msg

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(_TRANSIENT_ERRORS),
        reraise=True,
    )
    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=SMTP_TIMEOUT_SECONDS) as server:
            server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

    def send(self, to: str, subject: str, message: str) -> None:
        if not self.host:
            raise EmailDeliveryError("SMTP_HOST is not configured")

        try:
            self._deliver(self._build(to, subject, message))
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email delivery failed", extra={"to": to, "error": str(e)[:200]})
            raise EmailDeliveryError(str(e)) from e

        logger.info("Email sent", extra={"to": to, "subject": subject})
