"""
Outbound e-mail.

Messages are fire-and-forget: a delivery failure is logged and never
fails the operation that triggered it.
"""

import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from storefront.core.config import get_mail_backend, get_mail_sender, get_smtp_settings
from storefront.domain.entities import Client, Order
from storefront.domain.interfaces import IEmailDispatcher

logger = logging.getLogger(__name__)


class BaseEmailDispatcher(IEmailDispatcher):
    """Renders the application's messages; subclasses deliver them."""

    def __init__(self, sender: str) -> None:
        self.sender = sender

    def send_order_confirmation(self, order: Order, client: Client) -> None:
        lines = [
            f"Hello {client.name},",
            "",
            f"Your order #{order.id} has been received.",
            "",
        ]
        for item in order.items:
            lines.append(
                f"- {item.product_name or item.product_id}: "
                f"{item.quantity} x {item.price:.2f} = {item.subtotal:.2f}"
            )
        lines += ["", f"Total: {order.total:.2f}"]
        self.send(client.email, f"Order confirmed! Code: {order.id}", "\n".join(lines))

    def send_new_password(self, client: Client, new_password: str) -> None:
        body = f"Hello {client.name},\n\nYour new password is: {new_password}\n"
        self.send(client.email, "New password request", body)


class LogEmailDispatcher(BaseEmailDispatcher):
    """Writes messages to the log instead of delivering them."""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info(
            f"E-mail to {to}: {subject}",
            extra={"context": {"to": to, "subject": subject, "body": body}},
        )


class SmtpEmailDispatcher(BaseEmailDispatcher):
    def __init__(
        self,
        sender: str,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: int = 10,
    ) -> None:
        super().__init__(sender)
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def send(self, to: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain", "utf-8")
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username:
                    server.login(self.username, self.password or "")
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "E-mail delivery failed",
                extra={"context": {"to": to, "subject": subject, "error": str(e)}},
            )
            return

        logger.info("E-mail sent", extra={"context": {"to": to, "subject": subject}})


def build_email_dispatcher() -> IEmailDispatcher:
    """Create the dispatcher selected by MAIL_BACKEND."""
    sender = get_mail_sender()
    backend = get_mail_backend()
    if backend == "smtp":
        return SmtpEmailDispatcher(sender, **get_smtp_settings())
    if backend != "log":
        logger.warning(
            "Unknown MAIL_BACKEND; using log dispatcher",
            extra={"context": {"backend": backend}},
        )
    return LogEmailDispatcher(sender)
