from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    """Raised when an email could not be handed to the SMTP server."""


class Mailer(Protocol):
    def send(self, *, to: str, subject: str, html: str) -> None:
        raise NotImplementedError


class SmtpMailer(Mailer):
    def __init__(
        self,
        *,
        host: Optional[str],
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        use_ssl: bool = False,
        timeout: int = 30,
    ):
        self._host = host
        self._port = int(port)
        self._username = username
        self._password = password
        self._sender = sender or username
        self._use_ssl = bool(use_ssl)
        self._timeout = int(timeout)

    @property
    def configured(self) -> bool:
        return bool(self._host and self._sender)

    def _build_message(self, to: str, subject: str, html: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self._sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(html, "html", "utf-8"))
        return msg

    def _open(self) -> smtplib.SMTP:
        if self._use_ssl:
            return smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout)
        server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        server.ehlo()
        if server.has_extn("starttls"):
            server.starttls()
            server.ehlo()
        return server

    def send(self, *, to: str, subject: str, html: str) -> None:
        if not self.configured:
            raise MailDeliveryError("SMTP is not configured (SMTP_HOST / SMTP_FROM)")

        msg = self._build_message(to, subject, html)
        try:
            server = self._open()
            try:
                if self._username and self._password:
                    server.login(self._username, self._password)
                server.send_message(msg)
            finally:
                server.quit()
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"Failed to send '{subject}' to {to}: {e}") from e

        logger.info("Email sent to %s: %s", to, subject)
