"""
Service wiring.

``build_context`` constructs the connection provider and every service
once and bundles them into a ``ServiceContext`` that is handed to the
command layer.  ``get_context`` returns a process-wide context built
lazily from ``settings`` on first use; concurrent first calls are
serialised so exactly one context is ever built.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from airline_api.app.core.config import Settings, settings
from airline_api.app.core.db import ConnectionProvider, get_database_path
from airline_api.app.services.flight_service import FlightService
from airline_api.app.services.luggage_service import LuggageService
from airline_api.app.services.ticket_number import generate_ticket_number
from airline_api.app.services.ticket_service import TicketService
from airline_api.app.services.user_service import UserService


@dataclass(frozen=True)
class ServiceContext:
    settings: Settings
    provider: ConnectionProvider
    users: UserService
    flights: FlightService
    luggage: LuggageService
    tickets: TicketService


def build_context(
    config: Settings,
    provider: Optional[ConnectionProvider] = None,
    number_generator: Callable[[], str] = generate_ticket_number,
) -> ServiceContext:
    """Construct all services for ``config``."""
    if provider is None:
        provider = ConnectionProvider(get_database_path(config.database_url), timeout=config.db_timeout)
    users = UserService(provider)
    flights = FlightService(provider)
    luggage = LuggageService(provider)
    tickets = TicketService(
        provider,
        users,
        flights,
        luggage,
        number_generator=number_generator,
        max_attempts=config.ticket_number_max_attempts,
    )
    return ServiceContext(
        settings=config,
        provider=provider,
        users=users,
        flights=flights,
        luggage=luggage,
        tickets=tickets,
    )


_context: Optional[ServiceContext] = None
_context_lock = threading.Lock()


def get_context() -> ServiceContext:
    """Return the process-wide context, building it on first access."""
    global _context
    if _context is None:
        with _context_lock:
            if _context is None:
                _context = build_context(settings)
    return _context
