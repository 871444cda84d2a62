"""
Business logic for flights.

Flight lookups are read-mostly; each call opens its own short-lived
connection.  ``find_flights`` chooses the DAO search that matches the
criteria the customer filled in.
"""

import logging
from typing import List, Optional

from airline_api.app.core.db import ConnectionProvider
from airline_api.app.dao.flight_dao import FlightDAO
from airline_api.app.schemas.flight import Flight, FlightCreate, FlightSearch

logger = logging.getLogger(__name__)


class FlightService:
    """Service for scheduling and searching flights."""

    def __init__(self, provider: ConnectionProvider, dao: Optional[FlightDAO] = None) -> None:
        self._provider = provider
        self._dao = dao or FlightDAO()

    def get_flight_by_id(self, flight_id: int) -> Optional[Flight]:
        with self._provider.connection() as conn:
            return self._dao.get_by_id(flight_id, conn)

    def get_all_flights(self) -> List[Flight]:
        with self._provider.connection() as conn:
            return self._dao.get_all(conn)

    def find_flights(self, search: FlightSearch) -> List[Flight]:
        """Return flights matching ``search``.

        Departure airport is always used; arrival airport and date narrow
        the result when present.
        """
        departure = search.departure_airport
        arrival = search.arrival_airport
        day = search.departure_date
        with self._provider.connection() as conn:
            if arrival and day:
                return self._dao.get_by_departure_arrival_date(departure, arrival, day, conn)
            if arrival:
                return self._dao.get_by_departure_arrival(departure, arrival, conn)
            if day:
                return self._dao.get_by_departure_date(departure, day, conn)
            return self._dao.get_by_departure(departure, conn)

    def add_flight(self, data: FlightCreate) -> Flight:
        with self._provider.transaction() as conn:
            flight_id = self._dao.add(data, conn)
        logger.info("Scheduled flight %s (%s)", data.flight_number, flight_id)
        return Flight(id=flight_id, **data.model_dump())

    def delete_flight(self, flight_id: int) -> bool:
        with self._provider.transaction() as conn:
            deleted = self._dao.delete_by_id(flight_id, conn)
        return deleted > 0
