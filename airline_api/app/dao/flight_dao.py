"""
Data access for the ``flights`` table.

Besides the usual CRUD operations this DAO implements the three
flight searches offered to customers: by route and date, by route
only, and by departure airport and date.  Timestamps are stored as
ISO-8601 text; date filters compare on ``date(scheduled_departure)``.
"""

import datetime as dt
import logging
import sqlite3
from typing import List, Optional, Sequence

from airline_api.app.core.db import statement
from airline_api.app.schemas.flight import Flight, FlightCreate

logger = logging.getLogger(__name__)

_SELECT = (
    "SELECT id, aircraft_code, flight_number, departure_airport, arrival_airport, "
    "scheduled_departure, scheduled_arrival, price_per_seat FROM flights"
)


def _to_db_timestamp(value: dt.datetime) -> str:
    return value.isoformat(sep=" ")


class FlightDAO:
    """Reads and writes scheduled flights."""

    def add(self, flight: FlightCreate, connection: sqlite3.Connection) -> int:
        with statement(connection, logger) as cursor:
            cursor.execute(
                """
                INSERT INTO flights (
                    aircraft_code, flight_number, departure_airport, arrival_airport,
                    scheduled_departure, scheduled_arrival, price_per_seat
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    flight.aircraft_code,
                    flight.flight_number,
                    flight.departure_airport,
                    flight.arrival_airport,
                    _to_db_timestamp(flight.scheduled_departure),
                    _to_db_timestamp(flight.scheduled_arrival),
                    str(flight.price_per_seat),
                ),
            )
            return cursor.lastrowid

    def get_by_id(self, flight_id: int, connection: sqlite3.Connection) -> Optional[Flight]:
        """Return the flight with ``flight_id`` or ``None``."""
        rows = self._select(connection, " WHERE id = ?", (flight_id,))
        return rows[0] if rows else None

    def get_by_departure_arrival_date(
        self,
        departure: str,
        arrival: str,
        departure_date: dt.date,
        connection: sqlite3.Connection,
    ) -> List[Flight]:
        return self._select(
            connection,
            " WHERE departure_airport = ? AND arrival_airport = ?"
            " AND date(scheduled_departure) = ? ORDER BY scheduled_departure",
            (departure, arrival, departure_date.isoformat()),
        )

    def get_by_departure_arrival(
        self, departure: str, arrival: str, connection: sqlite3.Connection
    ) -> List[Flight]:
        return self._select(
            connection,
            " WHERE departure_airport = ? AND arrival_airport = ? ORDER BY scheduled_departure",
            (departure, arrival),
        )

    def get_by_departure_date(
        self, departure: str, departure_date: dt.date, connection: sqlite3.Connection
    ) -> List[Flight]:
        return self._select(
            connection,
            " WHERE departure_airport = ? AND date(scheduled_departure) = ?"
            " ORDER BY scheduled_departure",
            (departure, departure_date.isoformat()),
        )

    def get_by_departure(self, departure: str, connection: sqlite3.Connection) -> List[Flight]:
        return self._select(
            connection,
            " WHERE departure_airport = ? ORDER BY scheduled_departure",
            (departure,),
        )

    def get_all(self, connection: sqlite3.Connection) -> List[Flight]:
        return self._select(connection, " ORDER BY scheduled_departure", ())

    def delete_by_id(self, flight_id: int, connection: sqlite3.Connection) -> int:
        with statement(connection, logger) as cursor:
            cursor.execute("DELETE FROM flights WHERE id = ?", (flight_id,))
            return cursor.rowcount

    def _select(
        self, connection: sqlite3.Connection, clause: str, params: Sequence
    ) -> List[Flight]:
        with statement(connection, logger) as cursor:
            rows = cursor.execute(_SELECT + clause, tuple(params)).fetchall()
        return [self._row_to_flight(row) for row in rows]

    @staticmethod
    def _row_to_flight(row: sqlite3.Row) -> Flight:
        return Flight(
            id=row["id"],
            aircraft_code=row["aircraft_code"],
            flight_number=row["flight_number"],
            departure_airport=row["departure_airport"],
            arrival_airport=row["arrival_airport"],
            scheduled_departure=dt.datetime.fromisoformat(row["scheduled_departure"]),
            scheduled_arrival=dt.datetime.fromisoformat(row["scheduled_arrival"]),
            price_per_seat=row["price_per_seat"],
        )
