"""Booking REST API: book, list, cancel, modify, and process the ticket queue."""

import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException

from config import LOG_FORMAT, LOG_LEVEL
from models import (
    BookingCreate,
    BookingEntry,
    BookingModify,
    OutcomeResponse,
    OutcomeStatus,
    Ticket,
    TicketResponse,
)
from queue_store import TicketQueue
from transaction_log import build_transaction_log

logger = logging.getLogger(__name__)

app = FastAPI(title="Ticket Booking Queue", version="1.0.0")

_queue: Optional[TicketQueue] = None


def get_queue() -> TicketQueue:
    """Process-wide queue, created on first use with the configured transaction log."""
    global _queue
    if _queue is None:
        _queue = TicketQueue(listener=build_transaction_log())
    return _queue


@app.on_event("startup")
async def startup() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logger.info("Ticket Booking Queue API started")


# Handlers are async so every queue call runs on the event loop thread.


@app.post("/bookings", response_model=TicketResponse, status_code=201)
async def create_booking(payload: BookingCreate, queue: TicketQueue = Depends(get_queue)) -> TicketResponse:
    """Book a ticket and queue it by category."""
    ticket = Ticket(
        name=payload.name,
        category=payload.category,
        email=payload.email,
        phone=payload.phone,
    )
    queue.insert(ticket)
    logger.info("Ticket booked for %s in %s category", ticket.name, ticket.category.label)
    return TicketResponse.from_ticket(ticket)


@app.get("/bookings", response_model=List[BookingEntry])
async def list_bookings(queue: TicketQueue = Depends(get_queue)) -> List[BookingEntry]:
    """Return queued bookings front to back (no mutation)."""
    return queue.list()


@app.post("/bookings/next", response_model=OutcomeResponse)
async def process_next_booking(queue: TicketQueue = Depends(get_queue)) -> OutcomeResponse:
    """Dequeue and return the head ticket. 404 if the queue is empty."""
    outcome = queue.process_next()
    if outcome.status == OutcomeStatus.nothing_to_process:
        raise HTTPException(status_code=404, detail="Queue is empty")
    logger.info("%s", outcome.message)
    return OutcomeResponse.from_outcome(outcome)


@app.post("/bookings/{name}/cancel", response_model=OutcomeResponse)
async def cancel_booking(name: str, queue: TicketQueue = Depends(get_queue)) -> OutcomeResponse:
    """Cancel the first booked ticket with this name; it stays in the queue."""
    outcome = queue.cancel(name)
    if not outcome.ok:
        raise HTTPException(
            status_code=404,
            detail={"message": outcome.message, "reason": outcome.reason.value},
        )
    return OutcomeResponse.from_outcome(outcome)


@app.put("/bookings/{name}", response_model=OutcomeResponse)
async def modify_booking(
    name: str,
    payload: BookingModify,
    queue: TicketQueue = Depends(get_queue),
) -> OutcomeResponse:
    """Rename and recategorize a booked ticket in place (queue order unchanged)."""
    outcome = queue.modify(name, payload.new_name, payload.category)
    if not outcome.ok:
        raise HTTPException(
            status_code=404,
            detail={"message": outcome.message, "reason": outcome.reason.value},
        )
    return OutcomeResponse.from_outcome(outcome)


@app.get("/health")
async def health(queue: TicketQueue = Depends(get_queue)) -> dict:
    """Health check."""
    return {"status": "ok", "queued": len(queue)}
