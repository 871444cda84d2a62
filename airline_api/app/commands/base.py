"""
Base types shared by all commands.

``CommandRequest`` is the transport-neutral view of an inbound request:
flat string parameters, a per-user session mapping and a mapping of
attributes that the command fills in for the page it returns.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from airline_api.app.core.errors import DatabaseConnectionError, PersistenceError
from airline_api.app.services.context import ServiceContext

# Request parameter names.
COMMAND = "command"
LOGIN = "login"
LUGGAGE_ID = "luggage_id"
LUGGAGE_TYPE = "luggage_type"
PRICE = "price"
FLIGHT_ID = "flight_id"
DEPARTURE_AIRPORT = "departure_airport"
ARRIVAL_AIRPORT = "arrival_airport"
DEPARTURE_DATE = "departure_date"
TICKET_NUMBER = "ticket_number"

# Session keys.
SESSION_LOGIN = "login"
SESSION_TICKET = "ticket"

# Attribute names read by pages.
DATABASE_ERROR = "database_error"
INVALID_INPUT = "invalid_input"
LOGIN_ERROR = "login_error"
LUGGAGE_ADD_SUCCESS = "luggage_add_success"
LUGGAGE_UPDATE_SUCCESS = "luggage_update_success"
LUGGAGE_DELETE_SUCCESS = "luggage_delete_success"
LUGGAGE_UNIQUE_ERROR = "luggage_unique_error"
LUGGAGE_NOT_FOUND = "luggage_not_found"
FLIGHTS = "flights"
TICKET = "ticket"
TICKETS = "tickets"
TICKET_ERROR = "ticket_error"
TICKET_BUY_SUCCESS = "ticket_buy_success"
TICKET_DELETE_SUCCESS = "ticket_delete_success"

DATABASE_ACCESS_ERROR = "Database access error"

# Failures that send the user to the error page.
DATA_ERRORS = (PersistenceError, DatabaseConnectionError)


@dataclass
class CommandRequest:
    parameters: Dict[str, str] = field(default_factory=dict)
    session: Dict[str, Any] = field(default_factory=dict)
    attributes: Dict[str, Any] = field(default_factory=dict)

    def get_parameter(self, name: str) -> Optional[str]:
        """Return the stripped parameter value, or ``None`` if blank or absent."""
        value = self.parameters.get(name)
        if value is None:
            return None
        value = str(value).strip()
        return value or None


class BasicCommand(ABC):
    """A single request action.

    ``execute`` returns the page to forward to, or ``None`` to send the
    user back to the index page.
    """

    def __init__(self, context: ServiceContext) -> None:
        self.context = context
        self.logger = logging.getLogger(type(self).__module__)

    @abstractmethod
    def execute(self, request: CommandRequest) -> Optional[str]:
        raise NotImplementedError

    def page(self, name: str) -> str:
        return self.context.settings.page(name)

    def database_error(self, request: CommandRequest, exc: Exception) -> str:
        """Flag ``request`` with a database error and return the error page."""
        self.logger.error("%s in %s: %s", DATABASE_ACCESS_ERROR, type(self).__name__, exc)
        request.attributes[DATABASE_ERROR] = DATABASE_ACCESS_ERROR
        return self.page("error")
