"""In-memory booking queue ordered by ticket category.

Tickets sit in a plain list kept in category-rank order. Equal ranks keep
arrival order: a new ticket lands after every queued ticket of the same rank.
Only the head is ever removed. Cancel and modify change a ticket where it
stands, so neither one moves it (a modified category is not re-sorted).
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Protocol

from models import BookingEntry, NotFoundReason, Outcome, OutcomeStatus, Ticket, TicketCategory

logger = logging.getLogger(__name__)


class TransactionListener(Protocol):
    """Receives one line per queue action (see transaction_log)."""

    def record(self, message: str) -> None: ...


class TicketQueue:
    def __init__(
        self,
        listener: Optional[TransactionListener] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._tickets: List[Ticket] = []
        self._listener = listener
        self._clock = clock

    def __len__(self) -> int:
        return len(self._tickets)

    def is_empty(self) -> bool:
        return not self._tickets

    def insert(self, ticket: Ticket) -> None:
        """Queue a ticket behind every ticket of equal or better rank."""
        if self.is_empty() or ticket.rank < self._tickets[0].rank:
            pos = 0
        else:
            # Compare successors, not bisect: ranks may be out of order after modify.
            pos = 0
            while pos + 1 < len(self._tickets) and self._tickets[pos + 1].rank <= ticket.rank:
                pos += 1
            pos += 1
        self._tickets.insert(pos, ticket)
        logger.debug("Inserted %s (%s) at position %d", ticket.name, ticket.category.label, pos)
        self._record(f"Booked ticket for {ticket.name} ({ticket.rank})")

    def process_next(self) -> Outcome:
        """Remove and return the head ticket."""
        if self.is_empty():
            logger.debug("Process requested on empty queue")
            return Outcome(status=OutcomeStatus.nothing_to_process, message="No tickets left to process.")
        ticket = self._tickets.pop(0)
        ticket.is_booked = True
        self._record(f"Processed booking for {ticket.name}")
        return Outcome(
            status=OutcomeStatus.ok,
            message=f"Processing ticket for: {ticket.name} ({ticket.category.label})",
            ticket=ticket,
        )

    def cancel(self, name: str) -> Outcome:
        """Cancel the first booked ticket called `name`. The ticket stays queued."""
        ticket, reason = self._find_booked(name)
        self._record(f"Cancelled booking for {name}")
        if ticket is None:
            logger.info("Cancel: no booked ticket for %s (%s)", name, reason.value)
            return Outcome(
                status=OutcomeStatus.not_found,
                message=f"No booked ticket found for {name}",
                reason=reason,
            )
        ticket.is_booked = False
        ticket.cancellation_time = self._clock()
        return Outcome(
            status=OutcomeStatus.ok,
            message=f"Booking cancelled for: {name}",
            ticket=ticket.model_copy(),
        )

    def modify(self, old_name: str, new_name: str, new_category: TicketCategory) -> Outcome:
        """Rename and recategorize the first booked ticket called `old_name`, in place."""
        ticket, reason = self._find_booked(old_name)
        self._record(f"Modified booking for {old_name} to {new_name}")
        if ticket is None:
            logger.info("Modify: no booked ticket for %s (%s)", old_name, reason.value)
            return Outcome(
                status=OutcomeStatus.not_found,
                message=f"Booking not found for {old_name}",
                reason=reason,
            )
        ticket.name = new_name
        ticket.category = new_category
        return Outcome(
            status=OutcomeStatus.ok,
            message=f"Booking modified: {old_name} to {new_name}",
            ticket=ticket.model_copy(),
        )

    def list(self) -> List[BookingEntry]:
        """Current bookings front to back (no mutation)."""
        return [BookingEntry.from_ticket(t) for t in self._tickets]

    def tickets(self) -> List[Ticket]:
        """Copies of the queued tickets front to back."""
        return [t.model_copy() for t in self._tickets]

    def clear(self) -> None:
        self._tickets.clear()

    def _find_booked(self, name: str):
        seen_cancelled = False
        for ticket in self._tickets:
            if ticket.name != name:
                continue
            if ticket.is_booked:
                return ticket, None
            seen_cancelled = True
        reason = NotFoundReason.already_cancelled if seen_cancelled else NotFoundReason.unknown_name
        return None, reason

    def _record(self, message: str) -> None:
        if self._listener is not None:
            self._listener.record(message)
