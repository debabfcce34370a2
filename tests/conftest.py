from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app import app, get_queue
from models import Ticket, TicketCategory
from queue_store import TicketQueue

BOOKED_AT = datetime(2024, 3, 1, 9, 30, 0)
CANCELLED_AT = datetime(2024, 3, 1, 10, 0, 0)


class RecordingListener:
    def __init__(self):
        self.messages = []

    def record(self, message):
        self.messages.append(message)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def queue(listener):
    return TicketQueue(listener=listener, clock=lambda: CANCELLED_AT)


@pytest.fixture
def make_ticket():
    def _make(name, category=TicketCategory.ECONOMY, **kwargs):
        kwargs.setdefault("booking_time", BOOKED_AT)
        return Ticket(name=name, category=category, **kwargs)

    return _make


@pytest.fixture
def client(queue):
    app.dependency_overrides[get_queue] = lambda: queue
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_queue, None)


@pytest.fixture
def booked_at():
    return BOOKED_AT


@pytest.fixture
def cancelled_at():
    return CANCELLED_AT
