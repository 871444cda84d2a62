"""
Data access for the ``tickets`` table.

Tickets reference a user, a flight and a luggage option.  Reads join
the three tables so that a ticket comes back fully populated.  The
``ticket_number`` column carries a UNIQUE index; an insert that hits
it raises ``DuplicateRecordError``.
"""

import datetime as dt
import logging
import sqlite3
from typing import List, Optional

from airline_api.app.core.db import statement
from airline_api.app.schemas.flight import Flight
from airline_api.app.schemas.luggage import Luggage
from airline_api.app.schemas.ticket import Ticket
from airline_api.app.schemas.user import User

logger = logging.getLogger(__name__)

_SELECT = """
    SELECT t.id AS ticket_id, t.ticket_number, t.total_price,
           u.id AS user_id, u.login, u.full_name, u.is_admin,
           f.id AS flight_id, f.aircraft_code, f.flight_number,
           f.departure_airport, f.arrival_airport,
           f.scheduled_departure, f.scheduled_arrival, f.price_per_seat,
           l.id AS luggage_id, l.luggage_type, l.price AS luggage_price
    FROM tickets t
    JOIN users u ON u.id = t.user_id
    JOIN flights f ON f.id = t.flight_id
    JOIN luggage l ON l.id = t.luggage_id
"""


class TicketDAO:
    """Reads and writes issued tickets."""

    def add(self, ticket: Ticket, connection: sqlite3.Connection) -> int:
        """Insert ``ticket`` and return the new row id.

        The ticket must be fully populated (see ``Ticket.is_valid``).
        """
        with statement(connection, logger) as cursor:
            cursor.execute(
                """
                INSERT INTO tickets (ticket_number, user_id, flight_id, luggage_id, total_price)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    ticket.ticket_number,
                    ticket.user.id,
                    ticket.flight.id,
                    ticket.luggage.id,
                    str(ticket.total_price),
                ),
            )
            return cursor.lastrowid

    def exists_by_number(self, ticket_number: str, connection: sqlite3.Connection) -> bool:
        """Return True if a ticket with ``ticket_number`` is already stored."""
        with statement(connection, logger) as cursor:
            row = cursor.execute(
                "SELECT 1 FROM tickets WHERE ticket_number = ? LIMIT 1",
                (ticket_number,),
            ).fetchone()
        return row is not None

    def get_by_number(self, ticket_number: str, connection: sqlite3.Connection) -> Optional[Ticket]:
        with statement(connection, logger) as cursor:
            row = cursor.execute(
                _SELECT + " WHERE t.ticket_number = ?",
                (ticket_number,),
            ).fetchone()
        return self._row_to_ticket(row) if row else None

    def get_all_by_user(self, user: User, connection: sqlite3.Connection) -> List[Ticket]:
        with statement(connection, logger) as cursor:
            rows = cursor.execute(
                _SELECT + " WHERE t.user_id = ? ORDER BY f.scheduled_departure, t.id",
                (user.id,),
            ).fetchall()
        return [self._row_to_ticket(row) for row in rows]

    def get_all(self, connection: sqlite3.Connection) -> List[Ticket]:
        with statement(connection, logger) as cursor:
            rows = cursor.execute(_SELECT + " ORDER BY t.id").fetchall()
        return [self._row_to_ticket(row) for row in rows]

    def delete_by_number(self, ticket_number: str, connection: sqlite3.Connection) -> int:
        with statement(connection, logger) as cursor:
            cursor.execute("DELETE FROM tickets WHERE ticket_number = ?", (ticket_number,))
            return cursor.rowcount

    @staticmethod
    def _row_to_ticket(row: sqlite3.Row) -> Ticket:
        return Ticket(
            id=row["ticket_id"],
            ticket_number=row["ticket_number"],
            total_price=row["total_price"],
            user=User(
                id=row["user_id"],
                login=row["login"],
                full_name=row["full_name"],
                is_admin=bool(row["is_admin"]),
            ),
            flight=Flight(
                id=row["flight_id"],
                aircraft_code=row["aircraft_code"],
                flight_number=row["flight_number"],
                departure_airport=row["departure_airport"],
                arrival_airport=row["arrival_airport"],
                scheduled_departure=dt.datetime.fromisoformat(row["scheduled_departure"]),
                scheduled_arrival=dt.datetime.fromisoformat(row["scheduled_arrival"]),
                price_per_seat=row["price_per_seat"],
            ),
            luggage=Luggage(
                id=row["luggage_id"],
                luggage_type=row["luggage_type"],
                price=row["luggage_price"],
            ),
        )
