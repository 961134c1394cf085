"""SMS delivery of new-item digests through Twilio."""

import logging
from typing import Optional

from .config import TwilioConfig

logger = logging.getLogger(__name__)

try:
    from twilio.base.exceptions import TwilioRestException
    from twilio.rest import Client
    TWILIO_AVAILABLE = True
except ImportError:
    TWILIO_AVAILABLE = False
    logger.warning("Twilio library not installed. Install with: pip install twilio")

TWILIO_AUTH_ERROR = 20003


def send_sms(body: str, config: TwilioConfig) -> Optional[str]:
    """
    Send a digest as a single SMS.

    Args:
        body: Plain-text digest, already trimmed to SMS size.
        config: Twilio configuration.

    Returns:
        The Twilio message SID, or None if the body was empty.

    Raises:
        ImportError: If Twilio library is not installed.
        TwilioRestException: If Twilio rejected the request.
    """
    if not TWILIO_AVAILABLE:
        raise ImportError(
            "Twilio library not installed. Install with: pip install twilio"
        )

    if not body or not body.strip():
        logger.info("Digest is empty; not sending SMS.")
        return None

    client = Client(config.account_sid, config.auth_token)
    try:
        sent = client.messages.create(body=body, from_=config.from_number, to=config.to_number)
    except TwilioRestException as e:
        if e.code == TWILIO_AUTH_ERROR or e.status == 401:
            logger.error(
                f"Twilio rejected the credentials for account {config.account_sid[:10]}...; "
                "check TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN"
            )
        else:
            logger.error(f"Twilio error {e.code}: {e.msg}")
        raise

    logger.info(f"SMS sent to {config.to_number}. SID: {sent.sid}")
    return sent.sid
