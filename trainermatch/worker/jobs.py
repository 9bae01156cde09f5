"""
Notification job handler.

Payload: {"type": "email" | "sms" | "whatsapp", "recipient": str,
          "message": str, "subject": str (optional, email only)}
Result:  {"status": "sent", "recipient": str, "type": str}

An unknown type raises, which RQ records as a failed job. Retries are a
queue-level setting and are not attempted here.
"""

import logging

from trainermatch.worker import channels

logger = logging.getLogger(__name__)

# Channel per notification type
CHANNELS = {
    "email": channels.send_email,
    "sms": channels.send_sms,
    "whatsapp": channels.send_whatsapp,
}


class UnknownNotificationTypeError(ValueError):
    """Raised for payloads whose type has no channel."""


def _channel_for(notification_type: str):
    try:
        return CHANNELS[notification_type]
    except KeyError:
        raise UnknownNotificationTypeError(f"Unknown notification type: {notification_type}") from None


def process_notification(payload: dict) -> dict:
    """Deliver one queued notification through the channel named by its type."""
    notification_type = payload.get("type")
    recipient = payload.get("recipient")
    message = payload.get("message", "")

    logger.info("Processing %s notification for %s", notification_type, recipient)

    send = _channel_for(notification_type)
    send(recipient, message, subject=payload.get("subject"))

    return {"status": "sent", "recipient": recipient, "type": notification_type}


def on_job_success(job, connection, result, *args, **kwargs):
    logger.info("Notification job %s completed", job.id)


def on_job_failure(job, connection, exc_type, exc_value, traceback):
    logger.error("Notification job %s failed: %s", job.id if job else None, exc_value)
