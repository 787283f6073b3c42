"""
MongoDB access for the parts catalog

`db` is None when DATABASE_URL / DATABASE_NAME are not set; callers report
"Database not configured" in that case.
"""
from typing import Any, Dict, List, Optional

import structlog
from pymongo import MongoClient
from pymongo.database import Database

from config import get_settings

logger = structlog.get_logger(__name__)

_client: Optional[MongoClient] = None


def _connect() -> Optional[Database]:
    global _client
    settings = get_settings()
    if not settings.database_url or not settings.database_name:
        logger.warning("database_not_configured")
        return None
    _client = MongoClient(settings.database_url)
    return _client[settings.database_name]


db: Optional[Database] = _connect()


def get_documents(
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    if db is None:
        raise RuntimeError("Database not configured")
    cursor = db[collection_name].find(filter_dict or {})
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)
