"""Shared MongoClient for the users store."""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'tinyhouse')
USERS_COLLECTION_NAME = 'users'
APP_NAME = 'tinyhouse-viewer-api'

_client_cache = None
_connection_attempted = False
_connection_failed = False


def reset_client():
    """Forget the cached client and any earlier failure."""
    global _client_cache, _connection_attempted, _connection_failed
    _client_cache = None
    _connection_attempted = False
    _connection_failed = False


def client_options() -> dict:
    """Keyword arguments for MongoClient.

    Login and wallet updates are single find_one_and_update calls, so
    retryable writes cover a dropped connection mid-request.
    """
    return {
        'appname': APP_NAME,
        'serverSelectionTimeoutMS': 5000,
        'connectTimeoutMS': 5000,
        'socketTimeoutMS': 30000,
        'maxPoolSize': 10,
        'minPoolSize': 0,
        'maxIdleTimeMS': 30000,
        'waitQueueTimeoutMS': 10000,
        'retryWrites': True,
        'retryReads': True,
    }


def get_mongodb_client() -> MongoClient | None:
    """Return a healthy cached client, connecting on first use.

    A missing MONGO_URL or a failed first connection is remembered and
    not retried until reset_client(). A cached client that stops
    answering ping is dropped and replaced.
    """
    global _client_cache, _connection_attempted, _connection_failed

    if _client_cache:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            _client_cache = None
            logger.debug("[MONGODB] Cached client failed ping, reconnecting")

    if _connection_failed:
        return None

    mongo_url = os.getenv('MONGO_URL')
    if not mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        _connection_failed = True
        return None

    try:
        client = MongoClient(mongo_url, **client_options())
        client.admin.command('ping')
    except (ConnectionFailure, PyMongoError) as e:
        if not _connection_attempted:
            logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
            _connection_failed = True
        return None

    if not _connection_attempted:
        logger.info(f"[MONGODB] Connected to {DATABASE_NAME}")
    _connection_attempted = True
    _client_cache = client
    return client
