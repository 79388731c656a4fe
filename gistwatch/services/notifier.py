"""Email delivery of the digest over authenticated STARTTLS submission."""

import logging
import smtplib
from email.mime.text import MIMEText
from typing import Callable

from gistwatch.errors import DispatchError
from gistwatch.models import NotificationRequest
from gistwatch.services.report import SUBJECT

LOG = logging.getLogger("gistwatch.services.notifier")

SMTP_TIMEOUT = 30


def _default_smtp_factory(host: str, port: int, local_hostname: str | None) -> smtplib.SMTP:
    return smtplib.SMTP(host, port, local_hostname=local_hostname, timeout=SMTP_TIMEOUT)


def helo_domain(sender: str) -> str | None:
    """Domain part of the sender address, announced in EHLO/HELO."""
    _, at, domain = sender.rpartition("@")
    return domain if at and domain else None


def build_message(request: NotificationRequest, body: str) -> MIMEText:
    """Plain-text message with the fixed subject."""
    msg = MIMEText(body, "plain", "utf-8")
    msg["Subject"] = SUBJECT
    msg["From"] = request.sender
    msg["To"] = request.recipient
    return msg


class NotificationDispatcher:
    """Sends one message per run; a single attempt, no retry."""

    def __init__(self, smtp_factory: Callable[[str, int, str | None], smtplib.SMTP] = _default_smtp_factory) -> None:
        self._smtp_factory = smtp_factory

    def send(self, request: NotificationRequest, body: str) -> None:
        """Deliver body to request.recipient via request.smtp_server.

        Raises:
            DispatchError: On connection, TLS, authentication or send failure.
        """
        msg = build_message(request, body)
        LOG.debug("Connecting to SMTP server %s:%s", request.smtp_server, request.smtp_port)
        try:
            # SMTP.__exit__ sends QUIT and ignores a disconnect at that point
            with self._smtp_factory(request.smtp_server, request.smtp_port, helo_domain(request.sender)) as server:
                server.starttls()
                server.login(request.sender, request.password)
                server.send_message(msg, from_addr=request.sender, to_addrs=[request.recipient])
        except (smtplib.SMTPException, OSError) as e:
            raise DispatchError(f"Failed to send digest to {request.recipient}: {e}") from e
        LOG.info("Digest sent to %s", request.recipient)
