"""
Email notifications for signing links.

SMTP is optional: with no SMTP_HOST configured, messages are logged and skipped.
"""
import asyncio
import logging
import smtplib
from email.message import EmailMessage
from app.core.config import settings

logger = logging.getLogger(__name__)


def sign_url(token: str) -> str:
    return f"{settings.APP_URL.rstrip('/')}/sign/{token}"


def send_email(to_addr: str, subject: str, body: str) -> bool:
    if not to_addr:
        logger.warning(f"No recipient for '{subject}', skipping email")
        return False
    if not settings.SMTP_HOST:
        logger.warning(f"SMTP not configured, skipping email to {to_addr}: {subject}")
        return False

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.SMTP_FROM or settings.SMTP_USER
    msg["To"] = to_addr
    msg.set_content(body)

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as smtp:
        smtp.starttls()
        if settings.SMTP_USER:
            smtp.login(settings.SMTP_USER, settings.SMTP_PASS)
        smtp.send_message(msg)
    logger.info(f"Email sent to {to_addr}: {subject}")
    return True


async def send_signing_link(to_addr: str, recipient_name: str, token: str, message: str) -> bool:
    """Email a signing link from a worker thread. Delivery failures are logged, never raised."""
    body = (
        f"Hello {recipient_name},\n\n"
        f"{message}\n\n"
        f"Review and sign here: {sign_url(token)}\n"
    )
    try:
        return await asyncio.to_thread(send_email, to_addr, "Lease ready for your signature", body)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to email signing link to {to_addr}: {e}", exc_info=True)
        return False
