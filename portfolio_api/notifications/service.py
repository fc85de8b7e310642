"""Email delivery with encrypted SMTP credentials.

Used by the password reset flow. The SMTP password may be stored encrypted
using Fernet (AES-128-CBC) derived from SECRET_KEY.
"""

import base64
import hashlib
import logging
import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate, make_msgid
from typing import Protocol

from cryptography.fernet import Fernet

from ..config import settings
from ..errors import DeliveryError

logger = logging.getLogger(__name__)


# ── Credential encryption ─────────────────────────────────────────────


def _derive_fernet_key(secret: str) -> bytes:
    """Derive a Fernet key from the app SECRET_KEY using SHA-256."""
    digest = hashlib.sha256(secret.encode()).digest()
    return base64.urlsafe_b64encode(digest)


def encrypt_value(plaintext: str) -> str:
    """Encrypt a string value using the app's SECRET_KEY."""
    f = Fernet(_derive_fernet_key(settings.secret_key))
    return f.encrypt(plaintext.encode()).decode()


def decrypt_value(ciphertext: str) -> str:
    """Decrypt a string value using the app's SECRET_KEY."""
    f = Fernet(_derive_fernet_key(settings.secret_key))
    return f.decrypt(ciphertext.encode()).decode()


# ── Email building ─────────────────────────────────────────────────────


class Mailer(Protocol):
    """Outbound email interface."""

    def send(self, to: str, subject: str, body: str) -> None: ...


def build_message(sender: str, to: str, subject: str, body: str, sender_name: str = "") -> MIMEText:
    msg = MIMEText(body, "plain", "utf-8")
    msg["From"] = formataddr((sender_name, sender)) if sender_name else sender
    msg["To"] = to
    msg["Reply-To"] = sender
    msg["Date"] = formatdate(localtime=True)
    msg["Message-ID"] = make_msgid(domain=sender.split("@")[-1] if "@" in sender else "local")
    msg["Subject"] = subject
    return msg


def build_reset_email(reset_url: str) -> tuple[str, str]:
    """Subject and plain-text body for a password reset link."""
    subject = "Password Reset Request"
    body = (
        "You requested a password reset. Click the link below to reset your password:\n\n"
        f"{reset_url}\n\n"
        f"The link expires in {settings.reset_token_ttl_minutes} minutes.\n"
        "If you did not request this, please ignore this email.\n"
    )
    return subject, body


# ── Email sending ──────────────────────────────────────────────────────


class SmtpMailer:
    """SMTP with STARTTLS. Raises DeliveryError on any failure."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        sender_name: str = "",
        timeout: float = 15,
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._sender_name = sender_name
        self._timeout = timeout

    def send(self, to: str, subject: str, body: str) -> None:
        if not self._user or not self._password:
            raise DeliveryError("Email delivery is not configured")

        msg = build_message(self._user, to, subject, body, self._sender_name)
        # Fernet tokens start with 'gAAAAA'
        password = self._password
        if password.startswith("gAAAAA"):
            password = decrypt_value(password)

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                server.ehlo()
                server.starttls()
                server.ehlo()
                server.login(self._user, password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.exception("Failed to send email to %s", to)
            raise DeliveryError(f"Error sending email: {exc}") from exc
        logger.info("Sent '%s' email to %s", subject, to)


def create_mailer() -> Mailer:
    """Factory: create the SMTP mailer from configuration."""
    if not settings.smtp_user or not settings.smtp_password:
        logger.warning("SMTP not configured: password reset emails will fail")
    return SmtpMailer(
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_user,
        settings.smtp_password,
        settings.smtp_sender_name,
    )
