import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MONGO_URI = "mongodb://localhost:27017/blog"
DEFAULT_DB_NAME = "blog"

client: Optional[MongoClient] = None
db: Optional[Database] = None


def _database_name(mongo_client: MongoClient) -> str:
    name = os.getenv("MONGO_DB_NAME")
    if name:
        return name
    try:
        return mongo_client.get_default_database().name
    except ConfigurationError:
        return DEFAULT_DB_NAME


def connect() -> Database:
    """Open the process-wide client and ping the server.

    Raises the driver's error when the server cannot be reached.
    """
    global client, db
    if db is not None:
        return db

    uri = os.getenv("MONGODB_URI", DEFAULT_MONGO_URI)
    timeout_ms = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    mongo_client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
    try:
        mongo_client.admin.command("ping")
    except Exception:
        mongo_client.close()
        raise

    client = mongo_client
    db = mongo_client[_database_name(mongo_client)]
    logger.info("Connected to MongoDB successfully (database %s)", db.name)
    return db


def close() -> None:
    global client, db
    if client is not None:
        client.close()
    client = None
    db = None


# FastAPI dependency
def get_db() -> Database:
    return connect()
