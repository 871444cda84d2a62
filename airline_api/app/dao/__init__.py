"""
Data access objects.

Each DAO works against one table and takes the connection as an
explicit argument, so that a service can compose several DAO calls
into a single transaction.  DAOs never open or close connections
themselves; every cursor they create is closed before the method
returns or raises (see ``core.db.statement``).
"""

from .flight_dao import FlightDAO
from .luggage_dao import LuggageDAO
from .ticket_dao import TicketDAO
from .user_dao import UserDAO

__all__ = ["FlightDAO", "LuggageDAO", "TicketDAO", "UserDAO"]
