"""
Notification Service - queue producer side.

Enqueues notification jobs for the worker (trainermatch.worker). A queue
outage must not fail the request that triggered the notification, so
enqueue errors are logged and the job is dropped.
"""

import logging
from functools import lru_cache
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError
from rq import Queue

from trainermatch.core.config import get_settings
from trainermatch.worker.jobs import on_job_failure, on_job_success, process_notification

logger = logging.getLogger(__name__)

# Stored matches above this score trigger trainer notifications
AUTO_NOTIFY_THRESHOLD = 0.7


@lru_cache()
def get_redis_connection() -> Redis:
    return Redis.from_url(get_settings().redis_url)


def get_notification_queue() -> Queue:
    return Queue(get_settings().notification_queue, connection=get_redis_connection())


class NotificationService:
    """
    Sends email / SMS / WhatsApp notifications through the job queue.
    """

    def __init__(self, queue: Queue = None):
        self._queue = queue

    @property
    def queue(self) -> Queue:
        if self._queue is None:
            self._queue = get_notification_queue()
        return self._queue

    def enqueue(self, notification_type: str, recipient: str, message: str,
                subject: str = None) -> Optional[str]:
        """Queue one notification. Returns the job id, or None if the queue is unavailable."""
        payload = {"type": notification_type, "recipient": recipient, "message": message}
        if subject:
            payload["subject"] = subject
        try:
            job = self.queue.enqueue(
                process_notification,
                payload,
                on_success=on_job_success,
                on_failure=on_job_failure,
            )
        except (RedisError, OSError) as e:
            logger.error("Failed to enqueue %s notification for %s: %s", notification_type, recipient, e)
            return None
        logger.info("Queued %s notification %s for %s", notification_type, job.id, recipient)
        return job.id

    def send_email(self, to: str, subject: str, body: str) -> Optional[str]:
        return self.enqueue("email", to, body, subject=subject)

    def send_sms(self, to: str, message: str) -> Optional[str]:
        return self.enqueue("sms", to, message)

    def send_whatsapp(self, to: str, message: str) -> Optional[str]:
        return self.enqueue("whatsapp", to, message)

    def notify_trainer_match(self, trainer, requirement_title: str, score_pct: int) -> None:
        """Email (and WhatsApp when a phone is on file) a trainer about a new match."""
        message = f'New Match! You have a {score_pct}% match for "{requirement_title}". Check app to apply.'
        subject = f"New Requirement Match: {requirement_title}"

        if trainer.email:
            self.send_email(trainer.email, subject, message)
        if trainer.phone:
            self.send_whatsapp(trainer.phone, message)


def get_notification_service() -> NotificationService:
    """FastAPI dependency / factory."""
    return NotificationService()
