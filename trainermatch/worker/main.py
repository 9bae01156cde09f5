"""
Notification worker entry point.

One job at a time per process; run more processes against the same queue to
scale out.
"""

import logging

from redis import Redis
from rq import Worker

from trainermatch.core.config import get_settings
from trainermatch.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_worker(connection: Redis = None) -> Worker:
    settings = get_settings()
    connection = connection or Redis.from_url(settings.redis_url)
    return Worker([settings.notification_queue], connection=connection)


def main():
    setup_logging()
    worker = build_worker()
    logger.info("Notification worker started on queue '%s'", get_settings().notification_queue)
    worker.work()


if __name__ == "__main__":
    main()
