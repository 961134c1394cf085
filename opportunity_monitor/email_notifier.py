"""Email notification module for sending new-item digests."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from .composer import Message
from .config import SMTPConfig

logger = logging.getLogger(__name__)

SMTP_TIMEOUT = 30  # seconds


def build_mime(message: Message, to_email: str, from_email: str, from_name: str = "") -> MIMEMultipart:
    """Build a text + HTML alternative MIME message."""
    msg = MIMEMultipart("alternative")
    msg["From"] = formataddr((from_name, from_email)) if from_name else from_email
    msg["To"] = to_email
    msg["Subject"] = message.subject
    msg.attach(MIMEText(message.text, "plain", "utf-8"))
    msg.attach(MIMEText(message.html, "html", "utf-8"))
    return msg


def send_email(
    message: Message,
    to_email: str,
    smtp_config: SMTPConfig,
    from_name: str = "",
) -> None:
    """
    Send an email notification.

    Args:
        message: The rendered message to send.
        to_email: Recipient email address.
        smtp_config: SMTP settings; the login doubles as sender address.
        from_name: Display name for the From header.

    Raises:
        Exception: If email sending fails.
    """
    if not message.text.strip() and not message.html.strip():
        logger.info("Message is empty; not sending email.")
        return

    from_email = smtp_config.username
    smtp_host = smtp_config.host
    smtp_port = smtp_config.port
    logger.info(f"Using SMTP config: username={from_email}, host={smtp_host}:{smtp_port}, SSL={smtp_config.use_ssl}")

    msg = build_mime(message, to_email, from_email, from_name)

    try:
        if smtp_port == 465 or (smtp_config.use_ssl and smtp_port != 587):
            server = smtplib.SMTP_SSL(smtp_host, smtp_port, timeout=SMTP_TIMEOUT)
        else:
            # STARTTLS for 587
            server = smtplib.SMTP(smtp_host, smtp_port, timeout=SMTP_TIMEOUT)
            server.starttls()

        try:
            logger.debug("Attempting SMTP login...")
            server.login(smtp_config.username, smtp_config.password)
            server.send_message(msg)
        finally:
            server.quit()

        logger.info(f"Email sent successfully to {to_email}")
        logger.debug(f"Subject: {message.subject}")

    except smtplib.SMTPAuthenticationError as e:
        logger.error(
            f"SMTP authentication failed for {from_email}. "
            f"Common causes:\n"
            f"1. Password is incorrect or expired\n"
            f"2. For Gmail: Use an App Password, not your regular password\n"
            f"3. Check that EMAIL_USER and EMAIL_PASS are set correctly in .env\n"
            f"Error details: {e}"
        )
        raise
    except (smtplib.SMTPException, ConnectionError, TimeoutError) as e:
        logger.error(f"Failed to send email: {e}")
        raise
