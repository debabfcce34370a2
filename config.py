"""Configuration from environment."""

import os

from dotenv import load_dotenv

# .env lives next to this file; real environment variables win
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"

# file | redis | none
TRANSACTION_LOG_BACKEND = os.environ.get("TRANSACTION_LOG_BACKEND", "file")
TRANSACTION_LOG_PATH = os.environ.get("TRANSACTION_LOG_PATH", "ticket_log.txt")

REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
TRANSACTION_LOG_KEY = os.environ.get("TRANSACTION_LOG_KEY", "tbq:transactions")
TRANSACTION_LOG_MAX_ENTRIES = int(os.environ.get("TRANSACTION_LOG_MAX_ENTRIES", "10000"))


def get_transaction_log_backend() -> str:
    return (os.environ.get("TRANSACTION_LOG_BACKEND") or TRANSACTION_LOG_BACKEND).strip().lower()


def get_transaction_log_path() -> str:
    return (os.environ.get("TRANSACTION_LOG_PATH") or TRANSACTION_LOG_PATH).strip()
