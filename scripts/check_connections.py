#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the relational store, MongoDB and the Redis queue are reachable.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from trainermatch.core.config import get_settings
from trainermatch.db.mongodb import test_mongo_connection
from trainermatch.db.postgres import execute_raw_sql, test_postgres_connection
from trainermatch.services.notification_service import get_redis_connection


def check_redis() -> bool:
    try:
        return bool(get_redis_connection().ping())
    except (RedisError, OSError) as e:
        print(f"    {e}")
        return False


def print_table_counts():
    for table in ("vendors", "users", "trainers", "requirements", "matches"):
        try:
            rows = execute_raw_sql(f"SELECT COUNT(*) AS total FROM {table}")
        except SQLAlchemyError:
            print(f"    {table}: missing (run the API once to create tables)")
            continue
        print(f"    {table}: {rows[0]['total']}")


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("TRAINERMATCH - CONNECTION CHECK")
    print("=" * 50)

    results = []

    print("\n[1] Relational store...")
    if settings.database_url:
        print(f"    URL: {settings.database_url.split('@')[-1]}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    results.append(test_postgres_connection())
    print("    ✅ CONNECTED" if results[-1] else "    ❌ FAILED")
    if results[-1]:
        print_table_counts()

    print("\n[2] MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    results.append(test_mongo_connection())
    print("    ✅ CONNECTED" if results[-1] else "    ❌ FAILED")

    print("\n[3] Redis notification queue...")
    print(f"    URL: {settings.redis_url}  queue: {settings.notification_queue}")
    results.append(check_redis())
    print("    ✅ CONNECTED" if results[-1] else "    ❌ FAILED")

    if not settings.notification_webhook_url:
        print("\n    ⚠️  NOTIFICATION_WEBHOOK_URL not set, worker will only log deliveries")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
