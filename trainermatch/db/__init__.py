"""
Database module - relational (SQLAlchemy) and document (MongoDB) connections.
"""
from trainermatch.db.postgres import get_db, get_db_session, test_postgres_connection
from trainermatch.db.mongodb import get_mongo_db, test_mongo_connection

__all__ = [
    "get_db",
    "get_db_session",
    "test_postgres_connection",
    "get_mongo_db",
    "test_mongo_connection"
]
