import logging
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from domain.model.errors import StorageError

logger = logging.getLogger(__name__)

USERS_COLLECTION_NAME = 'users'


def create_mongodb_client(uri: str) -> MongoClient:
    """Create a MongoDB client.

    The driver connects lazily and reconnects on its own, so a server that is
    down when this runs only fails the operations issued while it stays down.
    The caller owns the client and closes it at shutdown.

    Raises:
        StorageError: the client could not be built (e.g. an SRV record
            failed to resolve)
    """
    try:
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=False,
            retryReads=False,
        )
    except PyMongoError as e:
        logger.error("[MONGODB] Client creation failed", extra={"error": str(e)[:200]})
        raise StorageError("Database unavailable") from e

    return client


def get_database(client: MongoClient, database_name: str) -> Database:
    """Return the database named in the URI, or database_name when the URI has none."""
    return client.get_default_database(default=database_name)


def ping(db: Database) -> bool:
    try:
        db.client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False
