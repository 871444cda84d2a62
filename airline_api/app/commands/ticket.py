"""
Ticket commands.

Buying a ticket takes two requests: ``create_ticket`` builds the
ticket and keeps it in the session so the customer can review the
price, then ``buy_ticket`` stores it.  The pending ticket is kept as
JSON-compatible data, so a session store that serializes to JSON can
hold it.  Every ticket command needs a
logged-in user; without one it returns ``None`` and the dispatcher
sends the user to the index page.
"""

from typing import Optional

from pydantic import ValidationError

from airline_api.app.core.errors import DuplicateRecordError, TicketValidationError
from airline_api.app.schemas.ticket import Ticket
from airline_api.app.services import ticket_service

from .base import (
    DATA_ERRORS,
    FLIGHT_ID,
    LUGGAGE_ID,
    SESSION_LOGIN,
    SESSION_TICKET,
    TICKET,
    TICKET_BUY_SUCCESS,
    TICKET_DELETE_SUCCESS,
    TICKET_ERROR,
    TICKET_NUMBER,
    TICKETS,
    BasicCommand,
    CommandRequest,
)


class CreateTicketCommand(BasicCommand):
    """Build a ticket for review and keep it in the session."""

    def execute(self, request: CommandRequest) -> Optional[str]:
        login = request.session.get(SESSION_LOGIN)
        if not login:
            return None
        ticket_info = {
            ticket_service.LOGIN: login,
            ticket_service.FLIGHT_ID: request.get_parameter(FLIGHT_ID),
            ticket_service.LUGGAGE_ID: request.get_parameter(LUGGAGE_ID),
        }
        try:
            ticket = self.context.tickets.create_ticket(ticket_info)
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        if not ticket.is_valid:
            request.attributes[TICKET_ERROR] = True
            return self.page("user")
        request.session[SESSION_TICKET] = ticket.model_dump(mode="json")
        request.attributes[TICKET] = ticket
        return self.page("confirm")


class BuyTicketCommand(BasicCommand):
    """Store the ticket built by ``create_ticket``."""

    def execute(self, request: CommandRequest) -> Optional[str]:
        login = request.session.get(SESSION_LOGIN)
        if not login:
            return None
        pending = request.session.pop(SESSION_TICKET, None)
        if pending is None:
            request.attributes[TICKET_ERROR] = True
            return self.page("user")
        try:
            ticket = Ticket.model_validate(pending)
        except ValidationError as e:
            self.logger.warning("Discarding malformed pending ticket for %s: %s", login, e)
            request.attributes[TICKET_ERROR] = True
            return self.page("user")
        if ticket.user is None or ticket.user.login != login:
            request.attributes[TICKET_ERROR] = True
            return self.page("user")
        tickets = self.context.tickets
        try:
            try:
                stored = tickets.add_ticket(ticket)
            except DuplicateRecordError:
                # The number was taken after the ticket was built; issue
                # the same booking again under a fresh number.
                stored = tickets.issue_ticket({
                    ticket_service.LOGIN: ticket.user.login,
                    ticket_service.FLIGHT_ID: str(ticket.flight.id),
                    ticket_service.LUGGAGE_ID: str(ticket.luggage.id),
                })
        except TicketValidationError:
            request.attributes[TICKET_ERROR] = True
            return self.page("user")
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        if stored.id is None:
            request.attributes[TICKET_ERROR] = True
            return self.page("user")
        request.session[TICKET_BUY_SUCCESS] = True
        request.attributes[TICKET] = stored
        return self.page("user")


class ShowTicketsCommand(BasicCommand):

    def execute(self, request: CommandRequest) -> Optional[str]:
        login = request.session.get(SESSION_LOGIN)
        if not login:
            return None
        try:
            user = self.context.users.get_user_by_login(login)
            if user is None:
                return None
            request.attributes[TICKETS] = self.context.tickets.get_tickets_for_user(user)
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        return self.page("user")


class DeleteTicketCommand(BasicCommand):
    """Cancel one of the current user's tickets."""

    def execute(self, request: CommandRequest) -> Optional[str]:
        login = request.session.get(SESSION_LOGIN)
        if not login:
            return None
        number = request.get_parameter(TICKET_NUMBER)
        if number is None:
            request.attributes[TICKET_ERROR] = True
            return self.page("user")
        tickets = self.context.tickets
        try:
            ticket = tickets.get_ticket_by_number(number)
            if ticket is None or ticket.user.login != login:
                request.attributes[TICKET_ERROR] = True
            elif tickets.delete_ticket(number):
                request.session[TICKET_DELETE_SUCCESS] = True
            else:
                request.attributes[TICKET_ERROR] = True
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        return self.page("user")
