"""
Command registry.

``CommandName`` is the closed set of commands a request may name.
Every member is mapped to exactly one command instance when the factory
is built; a name outside the set raises ``UnknownCommandError``.
"""

from enum import Enum
from typing import Dict

from airline_api.app.core.errors import UnknownCommandError
from airline_api.app.services.context import ServiceContext

from .base import COMMAND, BasicCommand, CommandRequest
from .flight import FindFlightsCommand
from .luggage import CreateLuggageCommand, DeleteLuggageCommand, UpdateLuggageCommand
from .ticket import BuyTicketCommand, CreateTicketCommand, DeleteTicketCommand, ShowTicketsCommand
from .user import LoginCommand, LogoutCommand


class CommandName(str, Enum):
    LOGIN = "login"
    LOGOUT = "logout"
    CREATE_LUGGAGE = "create_luggage"
    UPDATE_LUGGAGE = "update_luggage"
    DELETE_LUGGAGE = "delete_luggage"
    FIND_FLIGHTS = "find_flights"
    CREATE_TICKET = "create_ticket"
    BUY_TICKET = "buy_ticket"
    SHOW_TICKETS = "show_tickets"
    DELETE_TICKET = "delete_ticket"


_COMMAND_CLASSES = {
    CommandName.LOGIN: LoginCommand,
    CommandName.LOGOUT: LogoutCommand,
    CommandName.CREATE_LUGGAGE: CreateLuggageCommand,
    CommandName.UPDATE_LUGGAGE: UpdateLuggageCommand,
    CommandName.DELETE_LUGGAGE: DeleteLuggageCommand,
    CommandName.FIND_FLIGHTS: FindFlightsCommand,
    CommandName.CREATE_TICKET: CreateTicketCommand,
    CommandName.BUY_TICKET: BuyTicketCommand,
    CommandName.SHOW_TICKETS: ShowTicketsCommand,
    CommandName.DELETE_TICKET: DeleteTicketCommand,
}


class CommandsFactory:
    """Maps the ``command`` request parameter to a command instance."""

    def __init__(self, context: ServiceContext) -> None:
        missing = set(CommandName) - set(_COMMAND_CLASSES)
        if missing:
            raise RuntimeError(f"No command registered for {sorted(m.value for m in missing)}")
        self._commands: Dict[CommandName, BasicCommand] = {
            name: command_class(context) for name, command_class in _COMMAND_CLASSES.items()
        }

    def define_command(self, request: CommandRequest) -> BasicCommand:
        """Return the command named by ``request``.

        Raises
        ------
        UnknownCommandError
            If the parameter is missing or names no command.
        """
        name = request.get_parameter(COMMAND)
        if name is None:
            raise UnknownCommandError(name)
        try:
            command_name = CommandName(name.lower())
        except ValueError as e:
            raise UnknownCommandError(name) from e
        return self._commands[command_name]
