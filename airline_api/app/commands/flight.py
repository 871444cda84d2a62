"""Flight search command."""

from typing import Optional

from pydantic import ValidationError

from airline_api.app.schemas.flight import FlightSearch

from .base import (
    ARRIVAL_AIRPORT,
    DATA_ERRORS,
    DEPARTURE_AIRPORT,
    DEPARTURE_DATE,
    FLIGHTS,
    INVALID_INPUT,
    BasicCommand,
    CommandRequest,
)


class FindFlightsCommand(BasicCommand):
    """Search flights by departure airport, optional arrival and date."""

    def execute(self, request: CommandRequest) -> Optional[str]:
        try:
            search = FlightSearch(
                departure_airport=request.get_parameter(DEPARTURE_AIRPORT),
                arrival_airport=request.get_parameter(ARRIVAL_AIRPORT),
                departure_date=request.get_parameter(DEPARTURE_DATE),
            )
        except ValidationError:
            request.attributes[INVALID_INPUT] = True
            return self.page("user")
        try:
            request.attributes[FLIGHTS] = self.context.flights.find_flights(search)
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        return self.page("user")
