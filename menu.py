"""
Interactive console menu for the booking queue.
Run: python menu.py
"""

import logging
from typing import Callable, Optional

from config import LOG_FORMAT, LOG_LEVEL
from models import Ticket, TicketCategory
from queue_store import TicketQueue
from transaction_log import build_transaction_log

logger = logging.getLogger(__name__)

MENU = (
    "\nTicket Booking System Menu\n"
    "1. Book a Ticket\n"
    "2. View Booked Tickets\n"
    "3. Cancel a Booking\n"
    "4. Modify a Booking\n"
    "5. Process Next Booking\n"
    "6. Exit"
)
CATEGORY_PROMPT = "(1: VIP, 2: Economy, 3: Student): "


class BookingMenu:
    """Drive a TicketQueue from line-based input."""

    def __init__(
        self,
        queue: TicketQueue,
        read: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.queue = queue
        self.read = read or input
        self.write = write or print

    def _category(self, prompt: str) -> TicketCategory:
        raw = self.read(prompt + CATEGORY_PROMPT).strip()
        if raw not in ("1", "2", "3"):
            self.write("Invalid choice, assigning Economy by default.")
            return TicketCategory.ECONOMY
        return TicketCategory.from_choice(raw)

    def book(self) -> None:
        name = self.read("Enter your name: ").strip()
        email = self.read("Enter your email: ").strip()
        phone = self.read("Enter your phone number: ").strip()
        category = self._category("Select ticket category ")
        self.queue.insert(Ticket(name=name, category=category, email=email, phone=phone))
        self.write(f"Ticket booked successfully for {name} in {category.label} category.")

    def show(self) -> None:
        entries = self.queue.list()
        if not entries:
            self.write("No bookings available.")
            return
        for entry in entries:
            self.write(entry.describe())

    def cancel(self) -> None:
        name = self.read("Enter the name of the customer whose booking you want to cancel: ").strip()
        self.write(self.queue.cancel(name).message)

    def modify(self) -> None:
        old_name = self.read("Enter the name of the customer whose booking you want to modify: ").strip()
        new_name = self.read("Enter the new name: ").strip()
        category = self._category("Select new ticket category ")
        self.write(self.queue.modify(old_name, new_name, category).message)

    def process(self) -> None:
        self.write(self.queue.process_next().message)

    def run(self) -> None:
        actions = {
            "1": self.book,
            "2": self.show,
            "3": self.cancel,
            "4": self.modify,
            "5": self.process,
        }
        while True:
            self.write(MENU)
            try:
                choice = self.read("Enter your choice: ").strip()
            except EOFError:
                choice = "6"
            if choice == "6":
                self.write("Exiting the system.")
                return
            action = actions.get(choice)
            if action is None:
                self.write("Invalid choice! Please try again.")
                continue
            try:
                action()
            except EOFError:
                self.write("Exiting the system.")
                return


def main(queue: Optional[TicketQueue] = None) -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    if queue is None:
        queue = TicketQueue(listener=build_transaction_log())
    logger.info("Booking menu started")
    try:
        BookingMenu(queue).run()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        queue.clear()


if __name__ == "__main__":
    main()
