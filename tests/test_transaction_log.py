import json
import logging
from unittest.mock import MagicMock

import pytest
import redis

from models import Ticket, TicketCategory
from queue_store import TicketQueue
from transaction_log import (
    FileTransactionLog,
    NullTransactionLog,
    RedisTransactionLog,
    build_transaction_log,
)


def test_file_log_appends_lines(tmp_path):
    path = tmp_path / "logs" / "ticket_log.txt"
    log = FileTransactionLog(str(path))

    log.record("Booked ticket for Ann (1)")
    log.record("Cancelled booking for Ann")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith(": Booked ticket for Ann (1)")
    assert lines[1].endswith(": Cancelled booking for Ann")


def test_file_log_keeps_existing_content(tmp_path):
    path = tmp_path / "ticket_log.txt"
    path.write_text("old entry\n", encoding="utf-8")

    FileTransactionLog(str(path)).record("new entry")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "old entry"
    assert lines[1].endswith(": new entry")


def test_file_log_error_is_logged_not_raised(tmp_path, caplog):
    # a directory cannot be opened for append
    log = FileTransactionLog(str(tmp_path))
    with caplog.at_level(logging.WARNING, logger="transaction_log"):
        log.record("Booked ticket for Ann (1)")
    assert "Error opening log file" in caplog.text


def test_queue_writes_through_file_log(tmp_path):
    path = tmp_path / "ticket_log.txt"
    queue = TicketQueue(listener=FileTransactionLog(str(path)))
    queue.insert(Ticket(name="Ann", category=TicketCategory.STUDENT))
    queue.process_next()

    text = path.read_text(encoding="utf-8")
    assert "Booked ticket for Ann (3)" in text
    assert "Processed booking for Ann" in text


def test_redis_log_pushes_and_trims():
    client = MagicMock()
    pipe = client.pipeline.return_value
    log = RedisTransactionLog(key="test:tx", max_entries=50, client=client)

    log.record("Booked ticket for Ann (1)")

    key, raw = pipe.lpush.call_args.args
    assert key == "test:tx"
    assert json.loads(raw)["message"] == "Booked ticket for Ann (1)"
    pipe.ltrim.assert_called_once_with("test:tx", 0, 49)
    pipe.execute.assert_called_once()


def test_redis_log_error_is_logged_not_raised(caplog):
    client = MagicMock()
    client.pipeline.return_value.execute.side_effect = redis.ConnectionError("down")
    log = RedisTransactionLog(key="test:tx", client=client)

    with caplog.at_level(logging.WARNING, logger="transaction_log"):
        log.record("Cancelled booking for Ann")
    assert "failed" in caplog.text


def test_null_log_discards():
    assert NullTransactionLog().record("anything") is None


def test_build_file_backend(tmp_path, monkeypatch):
    monkeypatch.setenv("TRANSACTION_LOG_PATH", str(tmp_path / "tx.txt"))
    log = build_transaction_log("file")
    assert isinstance(log, FileTransactionLog)
    assert log.path == str(tmp_path / "tx.txt")


def test_build_backend_from_env(monkeypatch):
    monkeypatch.setenv("TRANSACTION_LOG_BACKEND", "none")
    assert isinstance(build_transaction_log(), NullTransactionLog)


def test_build_redis_backend(monkeypatch):
    from_url = MagicMock()
    monkeypatch.setattr("transaction_log.redis.from_url", from_url)
    log = build_transaction_log("redis")
    assert isinstance(log, RedisTransactionLog)
    from_url.assert_called_once()


def test_build_unknown_backend():
    with pytest.raises(ValueError):
        build_transaction_log("kafka")
