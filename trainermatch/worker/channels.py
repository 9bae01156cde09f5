"""
Notification channels.

Each channel logs the delivery. When NOTIFICATION_WEBHOOK_URL is set the
message is also handed to that webhook (an n8n workflow fronting the mail,
SMS and WhatsApp gateways); otherwise delivery stops at the log line.
"""

import logging
from typing import Optional

import httpx

from trainermatch.core.config import get_settings

logger = logging.getLogger(__name__)


def _post_webhook(kind: str, recipient: str, data: dict) -> None:
    settings = get_settings()
    if not settings.notification_webhook_url:
        logger.info("[MOCK %s] To: %s, Data: %s", kind, recipient, data)
        return

    response = httpx.post(
        settings.notification_webhook_url,
        json={"type": kind, "recipient": recipient, "data": data},
        timeout=settings.notification_webhook_timeout,
    )
    # Non-2xx fails the job so it lands in the failed registry
    response.raise_for_status()
    logger.info("[webhook] Triggered %s for %s", kind, recipient)


def send_email(recipient: str, message: str, subject: Optional[str] = None) -> None:
    logger.info("Sending email to %s: %s", recipient, subject or message)
    _post_webhook("EMAIL", recipient, {"subject": subject, "message": message})


def send_sms(recipient: str, message: str, subject: Optional[str] = None) -> None:
    logger.info("Sending SMS to %s: %s", recipient, message)
    _post_webhook("SMS", recipient, {"message": message})


def send_whatsapp(recipient: str, message: str, subject: Optional[str] = None) -> None:
    logger.info("Sending WhatsApp to %s: %s", recipient, message)
    _post_webhook("WHATSAPP", recipient, {"message": message})
