"""Pytest configuration and shared fixtures.

Every test gets its own SQLite file under ``tmp_path`` with the schema
applied.  Connections are created through a ``sqlite3.Connection``
subclass that records open cursors, so tests can assert that nothing
was leaked.
"""

import sqlite3
from typing import Iterable, Set

import pytest

from airline_api.app.core.config import Settings
from airline_api.app.core.db import ConnectionProvider, init_db, statement
from airline_api.app.services.context import ServiceContext, build_context

ALICE = "alice"
BOB = "bob"
FLIGHT_ID = 42
LUGGAGE_ID = 7


class CursorTracker:
    """Tracks cursors opened on connections built by ``connection_factory``."""

    def __init__(self) -> None:
        self.open: Set[sqlite3.Cursor] = set()
        self.opened = 0

    def connection_factory(self) -> type:
        cursors = self

        class TrackingCursor(sqlite3.Cursor):
            def close(self):
                cursors.open.discard(self)
                super().close()

        class TrackingConnection(sqlite3.Connection):
            def cursor(self, factory=TrackingCursor):
                cursor = super().cursor(factory)
                cursors.open.add(cursor)
                cursors.opened += 1
                return cursor

        return TrackingConnection


class SequenceGenerator:
    """Ticket number generator returning a fixed sequence of numbers."""

    def __init__(self, numbers: Iterable[str]) -> None:
        self._numbers = iter(numbers)
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return next(self._numbers)


@pytest.fixture
def cursors() -> CursorTracker:
    return CursorTracker()


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "airline.db")


@pytest.fixture
def provider(db_path, cursors) -> ConnectionProvider:
    provider = ConnectionProvider(db_path, timeout=1.0, factory=cursors.connection_factory())
    init_db(provider)
    return provider


@pytest.fixture
def config(db_path) -> Settings:
    return Settings(database_url=db_path, ticket_number_max_attempts=5)


@pytest.fixture
def context(config, provider) -> ServiceContext:
    return build_context(config, provider=provider)


@pytest.fixture
def seeded(provider) -> ConnectionProvider:
    """Users alice (customer) and bob, flight 42 at 120.00 and luggage 7 at 15.50."""
    with provider.transaction() as conn:
        with statement(conn) as cursor:
            cursor.executemany(
                "INSERT INTO users (login, full_name, is_admin) VALUES (?, ?, ?)",
                [(ALICE, "Alice Smith", 0), (BOB, "Bob Admin", 1)],
            )
            cursor.execute(
                """
                INSERT INTO flights (id, aircraft_code, flight_number, departure_airport,
                                     arrival_airport, scheduled_departure, scheduled_arrival,
                                     price_per_seat)
                VALUES (?, 'B738', 'PS101', 'MSQ', 'VNO', '2026-11-02 09:00:00',
                        '2026-11-02 10:05:00', 120.00)
                """,
                (FLIGHT_ID,),
            )
            cursor.execute(
                "INSERT INTO luggage (id, luggage_type, price) VALUES (?, 'checked 23kg', 15.50)",
                (LUGGAGE_ID,),
            )
    return provider


def count_rows(provider: ConnectionProvider, table: str) -> int:
    with provider.connection() as conn:
        with statement(conn) as cursor:
            return cursor.execute(f"SELECT COUNT(*) AS n FROM {table}").fetchone()["n"]
