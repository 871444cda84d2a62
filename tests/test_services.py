"""Tests for the user, flight and luggage services."""

import dataclasses
import datetime as dt
import threading

import pytest

from airline_api.app.core.errors import LuggageNotUniqueError
from airline_api.app.dao.luggage_dao import LuggageDAO
from airline_api.app.schemas.flight import FlightCreate, FlightSearch
from airline_api.app.schemas.luggage import Luggage, LuggageCreate
from airline_api.app.schemas.user import UserCreate
from airline_api.app.services import context as context_module
from airline_api.app.services.luggage_service import LuggageService

from conftest import ALICE, FLIGHT_ID, LUGGAGE_ID, count_rows


class SpyLuggageDAO(LuggageDAO):
    def __init__(self):
        self.adds = 0

    def add(self, luggage, connection):
        self.adds += 1
        return super().add(luggage, connection)


class TestUserService:

    def test_lookup(self, context, seeded):
        assert context.users.get_user_by_login(ALICE).login == ALICE
        assert context.users.get_user_by_login("nobody") is None
        assert context.users.get_user_by_login(None) is None
        assert seeded.open_connections == 0

    def test_add_user_and_uniqueness(self, context):
        assert context.users.is_unique_login("carol")
        user = context.users.add_user(UserCreate(login="carol"))
        assert user.id is not None
        assert not context.users.is_unique_login("carol")
        assert [u.login for u in context.users.get_all_users()] == ["carol"]


class TestFlightService:

    def test_find_flights_uses_given_criteria(self, context, seeded):
        flights = context.flights
        assert [f.id for f in flights.find_flights(FlightSearch(departure_airport="MSQ"))] == [FLIGHT_ID]
        by_date = FlightSearch(departure_airport="MSQ", arrival_airport="VNO", departure_date=dt.date(2026, 11, 2))
        assert len(flights.find_flights(by_date)) == 1
        other_day = FlightSearch(departure_airport="MSQ", departure_date=dt.date(2026, 11, 3))
        assert flights.find_flights(other_day) == []
        assert flights.find_flights(FlightSearch(departure_airport="MSQ", arrival_airport="RIX")) == []

    def test_add_and_delete(self, context):
        flight = context.flights.add_flight(
            FlightCreate(
                aircraft_code="E175",
                flight_number="PS202",
                departure_airport="VNO",
                arrival_airport="MSQ",
                scheduled_departure=dt.datetime(2026, 12, 1, 18, 0),
                scheduled_arrival=dt.datetime(2026, 12, 1, 19, 0),
                price_per_seat="80",
            )
        )
        assert context.flights.get_flight_by_id(flight.id).flight_number == "PS202"
        assert context.flights.delete_flight(flight.id)
        assert not context.flights.delete_flight(flight.id)


class TestLuggageService:

    def test_second_luggage_with_same_type_is_rejected_before_insert(self, context):
        spy = SpyLuggageDAO()
        service = LuggageService(context.provider, dao=spy)
        service.add_luggage(LuggageCreate(luggage_type="cabin", price="10"))
        duplicate = LuggageCreate(luggage_type="cabin", price="12")

        assert not service.is_unique_luggage(duplicate)
        with pytest.raises(LuggageNotUniqueError):
            service.add_luggage(duplicate)
        assert spy.adds == 1
        assert count_rows(context.provider, "luggage") == 1
        assert context.provider.open_connections == 0

    def test_update_keeps_own_type_unique(self, context, seeded):
        luggage = context.luggage.get_luggage_by_id(LUGGAGE_ID)
        renamed = Luggage(id=luggage.id, luggage_type=luggage.luggage_type, price="20")
        assert context.luggage.is_unique_luggage(renamed)
        assert context.luggage.update_luggage(renamed)

        other = context.luggage.add_luggage(LuggageCreate(luggage_type="cabin", price="0"))
        clash = Luggage(id=other.id, luggage_type=luggage.luggage_type, price="0")
        assert not context.luggage.is_unique_luggage(clash)
        with pytest.raises(LuggageNotUniqueError):
            context.luggage.update_luggage(clash)

    def test_update_missing_row(self, context):
        assert not context.luggage.update_luggage(Luggage(id=999, luggage_type="ghost", price="1"))

    def test_concurrent_creation_stores_one_row(self, context):
        results = []

        def create():
            try:
                context.luggage.add_luggage(LuggageCreate(luggage_type="oversize", price="40"))
                results.append("ok")
            except LuggageNotUniqueError:
                results.append("duplicate")

        threads = [threading.Thread(target=create) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(results) == ["duplicate", "duplicate", "duplicate", "ok"]
        assert count_rows(context.provider, "luggage") == 1
        assert context.provider.open_connections == 0


def test_get_context_builds_once(monkeypatch, config, provider):
    built = []
    real_build = context_module.build_context

    def fake_build(cfg):
        built.append(cfg)
        return real_build(config, provider=provider)

    monkeypatch.setattr(context_module, "_context", None)
    monkeypatch.setattr(context_module, "build_context", fake_build)

    threads = [threading.Thread(target=context_module.get_context) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(built) == 1
    assert context_module.get_context() is context_module.get_context()


def test_context_is_replaceable(context):
    service = LuggageService(context.provider, dao=SpyLuggageDAO())
    replaced = dataclasses.replace(context, luggage=service)
    assert replaced.luggage is service
    assert replaced.tickets is context.tickets
