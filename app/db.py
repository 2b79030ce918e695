"""
MongoDB connection provider.

One client per process, created on first use and reused by every request.
pymongo connects lazily, so an unreachable server only shows up as a
``ServerSelectionTimeoutError`` on the first real operation.
"""

import logging
import threading
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection

from app.config import Settings, get_settings

log = logging.getLogger("sales_tracker.db")

_client: Optional[MongoClient] = None
_client_lock = threading.Lock()


def get_client(settings: Optional[Settings] = None) -> MongoClient:
    global _client
    if _client is not None:
        return _client
    with _client_lock:
        if _client is None:
            cfg = settings or get_settings()
            _client = MongoClient(
                cfg.mongodb_uri,
                serverSelectionTimeoutMS=cfg.server_selection_timeout_ms,
                connectTimeoutMS=cfg.connect_timeout_ms,
                maxPoolSize=cfg.max_pool_size,
            )
            log.info(
                "mongo_client_created pool=%s selection_timeout_ms=%s",
                cfg.max_pool_size,
                cfg.server_selection_timeout_ms,
            )
    return _client


def get_sales_collection(settings: Optional[Settings] = None) -> Collection:
    cfg = settings or get_settings()
    # database and collection are created by MongoDB on first insert
    return get_client(cfg)[cfg.database_name][cfg.collection_name]


def close_client() -> None:
    global _client
    with _client_lock:
        if _client is not None:
            _client.close()
            _client = None
            log.info("mongo_client_closed")
