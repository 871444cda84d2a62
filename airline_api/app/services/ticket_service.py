"""
Business logic for issuing tickets.

A ticket is assembled from three independently stored entities: the
user identified by ``login``, a flight and a luggage option.  Building
a ticket and storing it are separate calls so that a caller can show
the ticket to the customer for confirmation before it is persisted:

* ``create_ticket`` resolves the references, reserves a ticket number
  that is not used by any stored ticket and computes the total price.
  When a reference cannot be resolved the returned ticket is only
  partially filled; nothing is raised and ``Ticket.is_valid`` is False.
* ``add_ticket`` stores a complete ticket in its own transaction.
* ``issue_ticket`` does both and regenerates the number if another
  transaction stored the same number in between (the ``tickets`` table
  has a UNIQUE index on ``ticket_number``).

Ticket number generation is bounded by ``max_attempts``; running out of
attempts raises ``TicketNumberExhaustedError`` rather than looping.
"""

import logging
from typing import Callable, List, Mapping, Optional

from airline_api.app.core.db import ConnectionProvider
from airline_api.app.core.errors import (
    DuplicateRecordError,
    TicketNumberExhaustedError,
    TicketValidationError,
)
from airline_api.app.dao.ticket_dao import TicketDAO
from airline_api.app.schemas.keys import parse_row_id
from airline_api.app.schemas.ticket import Ticket
from airline_api.app.schemas.user import User
from airline_api.app.services.flight_service import FlightService
from airline_api.app.services.luggage_service import LuggageService
from airline_api.app.services.ticket_number import generate_ticket_number
from airline_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

# Keys recognised in the mapping passed to ``create_ticket``.
LOGIN = "login"
FLIGHT_ID = "flight_id"
LUGGAGE_ID = "luggage_id"


class TicketService:
    """Service for building, storing, listing and deleting tickets."""

    def __init__(
        self,
        provider: ConnectionProvider,
        users: UserService,
        flights: FlightService,
        luggage: LuggageService,
        dao: Optional[TicketDAO] = None,
        number_generator: Callable[[], str] = generate_ticket_number,
        max_attempts: int = 20,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._provider = provider
        self._users = users
        self._flights = flights
        self._luggage = luggage
        self._dao = dao or TicketDAO()
        self._generate = number_generator
        self._max_attempts = max_attempts

    def create_ticket(self, ticket_info: Mapping[str, str]) -> Ticket:
        """Build a ticket from ``login``, ``flight_id`` and ``luggage_id``.

        Lookup failures caused by database errors propagate as
        ``PersistenceError``.  A lookup that finds nothing (or a key that
        is not a number) leaves the corresponding field empty.
        """
        login = ticket_info.get(LOGIN)
        user = self._users.get_user_by_login(login)

        flight_id = parse_row_id(ticket_info.get(FLIGHT_ID))
        flight = self._flights.get_flight_by_id(flight_id) if flight_id is not None else None

        luggage_id = parse_row_id(ticket_info.get(LUGGAGE_ID))
        luggage = self._luggage.get_luggage_by_id(luggage_id) if luggage_id is not None else None

        if user is None or flight is None or luggage is None:
            logger.warning(
                "Ticket for %r not built: user=%s flight=%s luggage=%s",
                login,
                user is not None,
                flight is not None,
                luggage is not None,
            )
            return Ticket(user=user, flight=flight, luggage=luggage)

        ticket_number = self._create_ticket_number()
        return Ticket(
            ticket_number=ticket_number,
            user=user,
            flight=flight,
            luggage=luggage,
            total_price=flight.price_per_seat + luggage.price,
        )

    def _create_ticket_number(self) -> str:
        """Return a ticket number not used by any stored ticket.

        Candidates are checked inside one transaction; the first one
        that is not found is returned.
        """
        with self._provider.transaction() as conn:
            for attempt in range(1, self._max_attempts + 1):
                number = self._generate()
                if number and not self._dao.exists_by_number(number, conn):
                    if attempt > 1:
                        logger.info("Ticket number found after %s attempts", attempt)
                    return number
            raise TicketNumberExhaustedError(self._max_attempts)

    def add_ticket(self, ticket: Ticket) -> Ticket:
        """Store a complete ticket and return it with its row id.

        Raises
        ------
        TicketValidationError
            If ``ticket`` is incomplete.
        DuplicateRecordError
            If another ticket with the same number was stored meanwhile.
        PersistenceError
            On any other database failure.  The transaction is rolled
            back and no row is left behind.
        """
        if not ticket.is_valid:
            raise TicketValidationError("Ticket is incomplete and cannot be stored")
        with self._provider.transaction() as conn:
            ticket_id = self._dao.add(ticket, conn)
        logger.info("Issued ticket %s for %s", ticket.ticket_number, ticket.user.login)
        return ticket.model_copy(update={"id": ticket_id})

    def issue_ticket(self, ticket_info: Mapping[str, str]) -> Ticket:
        """Build and store a ticket in one call.

        An incomplete ticket is returned as is, without being stored.
        """
        ticket = self.create_ticket(ticket_info)
        if not ticket.is_valid:
            return ticket
        for _ in range(self._max_attempts):
            try:
                return self.add_ticket(ticket)
            except DuplicateRecordError:
                logger.warning("Ticket number %s was taken concurrently", ticket.ticket_number)
                ticket = ticket.model_copy(update={"ticket_number": self._create_ticket_number()})
        raise TicketNumberExhaustedError(self._max_attempts)

    def get_tickets_for_user(self, user: User) -> List[Ticket]:
        with self._provider.transaction() as conn:
            return self._dao.get_all_by_user(user, conn)

    def get_ticket_by_number(self, ticket_number: str) -> Optional[Ticket]:
        with self._provider.connection() as conn:
            return self._dao.get_by_number(ticket_number, conn)

    def delete_ticket(self, ticket_number: str) -> bool:
        """Delete the ticket with ``ticket_number``; False if there was none."""
        with self._provider.transaction() as conn:
            deleted = self._dao.delete_by_number(ticket_number, conn)
        if deleted:
            logger.info("Deleted ticket %s", ticket_number)
        return deleted > 0
