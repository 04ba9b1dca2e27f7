import logging
import threading

from fastapi import Depends, Request
from pymongo.database import Database

from adapter.mongodb.connection import create_mongodb_client, get_database
from adapter.mongodb.user_repository import MongoUserRepository
from port.user_repository import UserRepository
from services.session_service import SessionTokenIssuer
from utils.config import get_database_name, get_mongodb_uri

logger = logging.getLogger(__name__)

_connect_lock = threading.Lock()


def connect_database(state) -> Database:
    """Create the app's MongoDB client and database on first use.

    The client is kept on ``state.mongo_client`` so the lifespan closes it.

    Raises:
        StorageError: the client could not be built
    """
    with _connect_lock:
        if state.db is None:
            client = create_mongodb_client(get_mongodb_uri())
            state.mongo_client = client
            state.db = get_database(client, get_database_name())
            logger.info("[MONGODB] Client created")
        return state.db


def get_db(request: Request) -> Database:
    """Get the app's MongoDB database, connecting if startup could not."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        db = connect_database(request.app.state)
    return db


def get_user_repo(db: Database = Depends(get_db)) -> UserRepository:
    return MongoUserRepository(db)


def get_session_issuer(request: Request) -> SessionTokenIssuer:
    return request.app.state.session_issuer
