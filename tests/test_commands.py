"""Tests for commands, the command factory and request dispatch."""

import dataclasses
import json
from decimal import Decimal

import pytest

from airline_api.app.commands import CommandName, CommandRequest, CommandsFactory, RequestHandler
from airline_api.app.commands import base
from airline_api.app.core.errors import PersistenceError, UnknownCommandError
from airline_api.app.schemas.ticket import Ticket

from conftest import ALICE, FLIGHT_ID, LUGGAGE_ID, count_rows


class BrokenLuggageService:
    def is_unique_luggage(self, luggage):
        raise PersistenceError("database is gone")


@pytest.fixture
def handler(context) -> RequestHandler:
    return RequestHandler(CommandsFactory(context), context.settings)


def make_request(session=None, **parameters) -> CommandRequest:
    return CommandRequest(parameters=parameters, session=session if session is not None else {})


class TestDispatch:

    @pytest.mark.parametrize("name", ["no_such_command", "", None])
    def test_unknown_command_redirects_to_index(self, handler, name):
        request = make_request() if name is None else make_request(command=name)
        outcome = handler.process_request(request)
        assert outcome.redirect
        assert outcome.destination == "/index"

    def test_factory_raises_typed_error(self, context):
        with pytest.raises(UnknownCommandError):
            CommandsFactory(context).define_command(make_request(command="drop_tables"))

    def test_every_command_name_is_registered(self, context):
        factory = CommandsFactory(context)
        for name in CommandName:
            assert factory.define_command(make_request(command=name.value)) is not None

    def test_command_name_is_case_insensitive(self, context, seeded):
        handler = RequestHandler(CommandsFactory(context), context.settings)
        outcome = handler.process_request(make_request(command="LOGIN", login=ALICE))
        assert not outcome.redirect
        assert outcome.destination == "/user"

    def test_command_returning_none_redirects(self, handler):
        outcome = handler.process_request(make_request(command="show_tickets"))
        assert outcome.redirect
        assert outcome.destination == "/index"


class TestUserCommands:

    def test_login_and_logout(self, handler, seeded):
        session = {}
        outcome = handler.process_request(make_request(session, command="login", login="bob"))
        assert outcome.destination == "/admin"
        assert session[base.SESSION_LOGIN] == "bob"

        outcome = handler.process_request(make_request(session, command="logout"))
        assert outcome.destination == "/index"
        assert session == {}

    def test_unknown_login(self, handler, seeded):
        request = make_request(command="login", login="mallory")
        outcome = handler.process_request(request)
        assert outcome.destination == "/index"
        assert request.attributes[base.LOGIN_ERROR] is True


class TestLuggageCommands:

    def test_create_luggage(self, handler, context):
        request = make_request(command="create_luggage", luggage_type="cabin", price="12.00")
        outcome = handler.process_request(request)
        assert outcome.destination == "/admin"
        assert request.session[base.LUGGAGE_ADD_SUCCESS] is True
        assert count_rows(context.provider, "luggage") == 1

    def test_duplicate_luggage_is_flagged(self, handler, context, seeded):
        request = make_request(command="create_luggage", luggage_type="checked 23kg", price="30")
        outcome = handler.process_request(request)
        assert outcome.destination == "/admin"
        assert request.attributes[base.LUGGAGE_UNIQUE_ERROR] is True
        assert base.LUGGAGE_ADD_SUCCESS not in request.session
        assert count_rows(context.provider, "luggage") == 1

    @pytest.mark.parametrize("price", ["", "cheap", "-5"])
    def test_invalid_price(self, handler, context, price):
        request = make_request(command="create_luggage", luggage_type="cabin", price=price)
        assert handler.process_request(request).destination == "/admin"
        assert request.attributes[base.INVALID_INPUT] is True
        assert count_rows(context.provider, "luggage") == 0

    def test_update_and_delete_luggage(self, handler, context, seeded):
        request = make_request(
            command="update_luggage", luggage_id=str(LUGGAGE_ID), luggage_type="checked 32kg", price="25"
        )
        handler.process_request(request)
        assert request.session[base.LUGGAGE_UPDATE_SUCCESS] is True
        assert context.luggage.get_luggage_by_id(LUGGAGE_ID).luggage_type == "checked 32kg"

        request = make_request(command="delete_luggage", luggage_id=str(LUGGAGE_ID))
        handler.process_request(request)
        assert request.session[base.LUGGAGE_DELETE_SUCCESS] is True

        request = make_request(command="delete_luggage", luggage_id=str(LUGGAGE_ID))
        handler.process_request(request)
        assert request.attributes[base.LUGGAGE_NOT_FOUND] is True

    @pytest.mark.parametrize("luggage_id", ["9" * 30, str(-(2 ** 63) - 1), "seven"])
    def test_out_of_range_luggage_id_is_invalid_input(self, handler, context, seeded, luggage_id):
        request = make_request(command="delete_luggage", luggage_id=luggage_id)
        assert handler.process_request(request).destination == "/admin"
        assert request.attributes[base.INVALID_INPUT] is True

        request = make_request(
            command="update_luggage", luggage_id=luggage_id, luggage_type="cabin", price="1"
        )
        assert handler.process_request(request).destination == "/admin"
        assert request.attributes[base.INVALID_INPUT] is True
        assert count_rows(context.provider, "luggage") == 1

    def test_database_failure_goes_to_error_page(self, context):
        broken = dataclasses.replace(context, luggage=BrokenLuggageService())
        handler = RequestHandler(CommandsFactory(broken), context.settings)
        request = make_request(command="create_luggage", luggage_type="cabin", price="1")
        outcome = handler.process_request(request)
        assert not outcome.redirect
        assert outcome.destination == "/error"
        assert request.attributes[base.DATABASE_ERROR] == base.DATABASE_ACCESS_ERROR


class TestFlightCommands:

    def test_find_flights(self, handler, seeded):
        request = make_request(command="find_flights", departure_airport="MSQ", departure_date="2026-11-02")
        assert handler.process_request(request).destination == "/user"
        assert [f.id for f in request.attributes[base.FLIGHTS]] == [FLIGHT_ID]

    def test_find_flights_requires_departure(self, handler, seeded):
        request = make_request(command="find_flights", arrival_airport="VNO")
        handler.process_request(request)
        assert request.attributes[base.INVALID_INPUT] is True


class TestTicketCommands:

    def _login(self, handler, session, login=ALICE):
        handler.process_request(make_request(session, command="login", login=login))

    def test_create_buy_show_and_delete(self, handler, context, seeded):
        session = {}
        self._login(handler, session)

        request = make_request(
            session, command="create_ticket", flight_id=str(FLIGHT_ID), luggage_id=str(LUGGAGE_ID)
        )
        outcome = handler.process_request(request)
        assert outcome.destination == "/user/confirm"
        pending = Ticket.model_validate(session[base.SESSION_TICKET])
        assert pending.total_price == Decimal("135.50")
        assert count_rows(context.provider, "tickets") == 0

        # Session stores such as signed cookies keep only JSON.
        session = json.loads(json.dumps(session))

        request = make_request(session, command="buy_ticket")
        assert handler.process_request(request).destination == "/user"
        assert session[base.TICKET_BUY_SUCCESS] is True
        assert base.SESSION_TICKET not in session
        assert count_rows(context.provider, "tickets") == 1

        request = make_request(session, command="show_tickets")
        handler.process_request(request)
        assert [t.ticket_number for t in request.attributes[base.TICKETS]] == [pending.ticket_number]

        request = make_request(session, command="delete_ticket", ticket_number=pending.ticket_number)
        handler.process_request(request)
        assert session[base.TICKET_DELETE_SUCCESS] is True
        assert count_rows(context.provider, "tickets") == 0

    def test_create_ticket_with_unknown_flight(self, handler, seeded):
        session = {}
        self._login(handler, session)
        request = make_request(session, command="create_ticket", flight_id="999", luggage_id=str(LUGGAGE_ID))
        assert handler.process_request(request).destination == "/user"
        assert request.attributes[base.TICKET_ERROR] is True
        assert base.SESSION_TICKET not in session

    def test_buy_rejects_malformed_pending_ticket(self, handler, context, seeded):
        session = {}
        self._login(handler, session)
        session[base.SESSION_TICKET] = {"ticket_number": "AB123456", "total_price": "free"}
        request = make_request(session, command="buy_ticket")
        assert handler.process_request(request).destination == "/user"
        assert request.attributes[base.TICKET_ERROR] is True
        assert base.SESSION_TICKET not in session
        assert count_rows(context.provider, "tickets") == 0

    def test_buy_rejects_ticket_built_for_another_user(self, handler, context, seeded):
        session = {}
        self._login(handler, session)
        handler.process_request(make_request(
            session, command="create_ticket", flight_id=str(FLIGHT_ID), luggage_id=str(LUGGAGE_ID)
        ))
        session[base.SESSION_LOGIN] = "bob"
        request = make_request(session, command="buy_ticket")
        handler.process_request(request)
        assert request.attributes[base.TICKET_ERROR] is True
        assert count_rows(context.provider, "tickets") == 0

    def test_buy_without_pending_ticket(self, handler, seeded):
        session = {}
        self._login(handler, session)
        request = make_request(session, command="buy_ticket")
        assert handler.process_request(request).destination == "/user"
        assert request.attributes[base.TICKET_ERROR] is True

    def test_cannot_delete_someone_elses_ticket(self, handler, context, seeded):
        stored = context.tickets.issue_ticket(
            {"login": ALICE, "flight_id": str(FLIGHT_ID), "luggage_id": str(LUGGAGE_ID)}
        )
        session = {}
        self._login(handler, session, login="bob")
        request = make_request(session, command="delete_ticket", ticket_number=stored.ticket_number)
        handler.process_request(request)
        assert request.attributes[base.TICKET_ERROR] is True
        assert count_rows(context.provider, "tickets") == 1

    def test_ticket_commands_need_login(self, handler, seeded):
        for name in ("create_ticket", "buy_ticket", "delete_ticket"):
            outcome = handler.process_request(make_request(command=name))
            assert outcome.redirect
