import logging
import threading
from typing import Dict, Optional

import redis

from .interfaces import KeyValueStore

logger = logging.getLogger(__name__)

class RedisStore(KeyValueStore):
    """Redis-backed byte store"""

    def __init__(self, url: Optional[str] = None, client: Optional[redis.Redis] = None):
        if client is None and url is None:
            raise ValueError("RedisStore needs a url or a client")
        self.redis = client or redis.Redis.from_url(url, decode_responses=False)

    def get(self, key: str) -> Optional[bytes]:
        try:
            return self.redis.get(key)
        except redis.RedisError as e:
            logger.warning(f"Redis read failed for {key}: {str(e)}")
            return None

    def set(self, key: str, value: bytes) -> None:
        try:
            self.redis.set(key, value)
        except redis.RedisError as e:
            logger.warning(f"Redis write failed for {key}: {str(e)}")

class InMemoryStore(KeyValueStore):
    """Process-local byte store"""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            self._data[key] = value
