"""Channel selection and delivery of new-record notifications."""

import logging
from typing import Optional, Sequence

from .composer import Message, compose, sms_text
from .config import AppConfig
from .email_notifier import send_email
from .errors import ChannelError
from .models import IdentifiedRecord, SourceDefinition
from .twilio_notifier import send_sms

logger = logging.getLogger(__name__)


def deliver(message: Message, config: AppConfig) -> bool:
    """
    Hand a rendered message to the configured channel.

    Returns:
        True if the message was sent, False if the channel is not
        configured (a no-op, not an error).

    Raises:
        ChannelError: If the channel is configured but sending failed.
    """
    method = config.notification.method

    if method == "sms":
        if config.twilio is None:
            logger.info("Twilio is not configured; skipping SMS notification.")
            return False
        try:
            send_sms(sms_text(message), config.twilio)
        except Exception as e:
            raise ChannelError(f"SMS delivery failed: {e}") from e
        return True

    to_email = config.notification.to_email
    if not to_email:
        logger.info("EMAIL_TO is not set; skipping email notification.")
        return False
    if not config.smtp.username or not config.smtp.password:
        logger.info("EMAIL_USER/EMAIL_PASS are not set; skipping email notification.")
        return False
    try:
        send_email(message, to_email, config.smtp, from_name=config.notification.from_name)
    except Exception as e:
        raise ChannelError(f"Email delivery failed: {e}") from e
    return True


def notify(
    records: Sequence[IdentifiedRecord],
    sources: Sequence[SourceDefinition],
    config: AppConfig,
) -> Optional[Message]:
    """
    Compose and deliver a notification for new records.

    Nothing is composed or sent for an empty batch.

    Returns:
        The message that was composed, or None for an empty batch.

    Raises:
        ChannelError: If delivery failed.
    """
    message = compose(records, sources)
    if message is None:
        logger.info("No new records; nothing to notify.")
        return None

    logger.info(f"Sending {config.notification.method} notification with {len(records)} new item(s)...")
    deliver(message, config)
    return message
