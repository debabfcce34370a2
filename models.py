"""Ticket records, queue outcomes, and pydantic models for the booking API."""

import logging
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class TicketCategory(IntEnum):
    """Booking category. The value is the rank: lower is served first."""

    VIP = 1
    ECONOMY = 2
    STUDENT = 3

    @property
    def label(self) -> str:
        return "VIP" if self is TicketCategory.VIP else self.name.capitalize()

    @classmethod
    def from_choice(cls, raw: Any) -> "TicketCategory":
        """Resolve raw user input (1-3, "2", "vip") to a category; anything else is ECONOMY."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            text = raw.strip()
            if text.upper() in cls.__members__:
                return cls[text.upper()]
            raw = text
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            logger.warning("Invalid category choice %r, assigning Economy by default", raw)
            return cls.ECONOMY


class OutcomeStatus(str, Enum):
    ok = "ok"
    nothing_to_process = "nothing_to_process"
    not_found = "not_found"


class NotFoundReason(str, Enum):
    """Why a cancel/modify lookup matched nothing."""

    unknown_name = "unknown_name"
    already_cancelled = "already_cancelled"


class Ticket(BaseModel):
    """A booking held by the queue."""

    model_config = ConfigDict(validate_assignment=True)

    name: str
    category: TicketCategory
    email: str = ""
    phone: str = ""
    booking_time: datetime = Field(default_factory=datetime.now)
    is_booked: bool = True
    cancellation_time: Optional[datetime] = None

    @property
    def rank(self) -> int:
        return int(self.category)


class Outcome(BaseModel):
    """Result of a queue call that can miss (process, cancel, modify)."""

    status: OutcomeStatus
    message: str
    ticket: Optional[Ticket] = None
    reason: Optional[NotFoundReason] = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.ok


class BookingEntry(BaseModel):
    """One row of the booking listing."""

    name: str
    category: TicketCategory
    is_booked: bool
    booking_time: Optional[datetime] = None

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> "BookingEntry":
        return cls(
            name=ticket.name,
            category=ticket.category,
            is_booked=ticket.is_booked,
            booking_time=ticket.booking_time if ticket.is_booked else None,
        )

    def describe(self) -> str:
        head = f"{self.name} ({self.category.label}), "
        if self.is_booked and self.booking_time is not None:
            return head + f"Booked at: {self.booking_time:%a %b %d %H:%M:%S %Y}"
        return head + "Not booked yet"


# --- API schemas ---


class BookingCreate(BaseModel):
    """Incoming booking for POST /bookings."""

    name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""
    category: TicketCategory = TicketCategory.ECONOMY

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, v: Any) -> TicketCategory:
        return TicketCategory.from_choice(v)


class BookingModify(BaseModel):
    """Body for PUT /bookings/{name}."""

    new_name: str = Field(min_length=1)
    category: TicketCategory = TicketCategory.ECONOMY

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, v: Any) -> TicketCategory:
        return TicketCategory.from_choice(v)


class TicketResponse(BaseModel):
    name: str
    category: TicketCategory
    category_label: str
    email: str
    phone: str
    booking_time: datetime
    is_booked: bool
    cancellation_time: Optional[datetime] = None

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> "TicketResponse":
        return cls(category_label=ticket.category.label, **ticket.model_dump())


class OutcomeResponse(BaseModel):
    status: OutcomeStatus
    message: str
    reason: Optional[NotFoundReason] = None
    ticket: Optional[TicketResponse] = None

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "OutcomeResponse":
        return cls(
            status=outcome.status,
            message=outcome.message,
            reason=outcome.reason,
            ticket=TicketResponse.from_ticket(outcome.ticket) if outcome.ticket else None,
        )
