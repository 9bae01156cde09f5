"""
MongoDB Connection Utility

MongoDB stores:
- Document records (proposals, MOUs, invoices, certificates...) attached to
  colleges, trainers and requirements

WHY MongoDB for these?
- Schema-flexible: each document type carries different metadata
- Document-oriented: folder browsing and text search, no joins needed
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from trainermatch.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def set_mongo_client(client: MongoClient) -> None:
    """Swap the process-wide client (used by tests with mongomock)."""
    global _client, _db
    _client = client
    _db = None


def get_mongo_db() -> Database:
    """Get the documents database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by name (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def close_mongo_client() -> None:
    """Close the client on application shutdown."""
    global _client, _db
    if _client is not None:
        _client.close()
        logger.info("MongoDB client closed")
    _client = None
    _db = None


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "documents": "documents",
}


def init_mongo_indexes():
    """
    Create indexes for the document listing filters.
    Call this once during app startup.
    """
    documents = get_collection(COLLECTIONS["documents"])

    documents.create_index("college_id")
    documents.create_index("requirement_id")
    documents.create_index("trainer_id")
    documents.create_index([("type", ASCENDING), ("created_at", DESCENDING)])
    documents.create_index([("created_at", DESCENDING)])

    logger.info("MongoDB indexes created successfully")
