"""Append-only transaction log: sinks the queue reports each booking action to."""

import json
import logging
import os
from datetime import datetime
from typing import Optional

import redis

from config import (
    REDIS_URL,
    TRANSACTION_LOG_KEY,
    TRANSACTION_LOG_MAX_ENTRIES,
    get_transaction_log_backend,
    get_transaction_log_path,
)

logger = logging.getLogger(__name__)


class NullTransactionLog:
    def record(self, message: str) -> None:
        return None


class FileTransactionLog:
    """Append `<timestamp>: <message>` lines to a text file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def record(self, message: str) -> None:
        line = f"{datetime.now().isoformat(timespec='seconds')}: {message}\n"
        try:
            parent = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(parent, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            logger.warning("Error opening log file %s: %s", self.path, e)


class RedisTransactionLog:
    """Push JSON entries onto a capped Redis list (newest first)."""

    def __init__(
        self,
        url: str = REDIS_URL,
        key: str = TRANSACTION_LOG_KEY,
        max_entries: int = TRANSACTION_LOG_MAX_ENTRIES,
        client: Optional[redis.Redis] = None,
    ) -> None:
        self.key = key
        self.max_entries = max_entries
        self._client = client or redis.from_url(url, decode_responses=True)

    def record(self, message: str) -> None:
        entry = {"timestamp": datetime.now().isoformat(), "message": message}
        try:
            pipe = self._client.pipeline()
            pipe.lpush(self.key, json.dumps(entry))
            pipe.ltrim(self.key, 0, self.max_entries - 1)
            pipe.execute()
        except redis.RedisError as e:
            logger.warning("Transaction log push to %s failed: %s", self.key, e)


def build_transaction_log(backend: Optional[str] = None):
    """Pick the sink named by TRANSACTION_LOG_BACKEND (file | redis | none)."""
    name = (backend or get_transaction_log_backend()).strip().lower()
    if name == "file":
        return FileTransactionLog(get_transaction_log_path())
    if name == "redis":
        return RedisTransactionLog()
    if name == "none":
        return NullTransactionLog()
    raise ValueError(f"Unknown transaction log backend: {name!r}")
