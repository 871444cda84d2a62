"""
SQLite connection provider and simple migration system.

This module hands out database connections (``ConnectionProvider``),
wraps per-call cursors in a scoped helper (``statement``) and applies
schema migrations on application start (``init_db``).  It uses SQLite
as a lightweight embedded database; to switch to another DBMS you
would replace the connection logic and adapt SQL syntax accordingly.

Connections are opened with the driver's implicit transactions turned
off.  Multi-statement work goes through ``ConnectionProvider.transaction``
which issues ``BEGIN IMMEDIATE``: SQLite then holds the write lock for
the whole unit of work, so two writers can never both pass a
check-then-insert sequence before one of them commits.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Set

from .errors import (
    DatabaseConnectionError,
    DuplicateRecordError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


def _execute(connection: sqlite3.Connection, sql: str) -> None:
    cursor = connection.cursor()
    try:
        cursor.execute(sql)
    finally:
        cursor.close()


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    If ``database_url`` is an absolute path, use it directly.  Otherwise
    resolve it relative to the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / database_url).resolve())


class ConnectionProvider:
    """Hands out SQLite connections and guarantees their release.

    Parameters
    ----------
    database_path : str
        Filesystem path of the SQLite database.
    timeout : float
        Seconds to wait for a locked database before failing.
    factory : type
        ``sqlite3.Connection`` subclass used for new connections.  Tests
        pass a subclass that counts open cursors.
    """

    def __init__(
        self,
        database_path: str,
        timeout: float = 5.0,
        factory: type = sqlite3.Connection,
    ) -> None:
        self.database_path = database_path
        self.timeout = timeout
        self._factory = factory
        self._open: Set[sqlite3.Connection] = set()
        self._lock = threading.Lock()

    @property
    def open_connections(self) -> int:
        """Number of connections acquired but not yet released."""
        with self._lock:
            return len(self._open)

    def acquire(self) -> sqlite3.Connection:
        """Open a new connection with explicit transaction control."""
        try:
            conn = sqlite3.connect(
                self.database_path,
                timeout=self.timeout,
                isolation_level=None,
                factory=self._factory,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            logger.error("Unable to open database %s: %s", self.database_path, e)
            raise DatabaseConnectionError("Unable to open database connection") from e
        conn.row_factory = sqlite3.Row
        try:
            # Foreign key enforcement is off by default in SQLite and
            # must be enabled per connection.
            _execute(conn, "PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            conn.close()
            logger.error("Unable to configure connection: %s", e)
            raise DatabaseConnectionError("Unable to configure database connection") from e
        with self._lock:
            self._open.add(conn)
        return conn

    def release(self, connection: Optional[sqlite3.Connection]) -> None:
        """Close a connection obtained from :meth:`acquire`.

        Releasing ``None`` or an already released connection is a no-op.
        """
        if connection is None:
            return
        with self._lock:
            if connection not in self._open:
                return
            self._open.discard(connection)
        try:
            connection.close()
        except sqlite3.Error as e:
            logger.error("Unable to close database connection: %s", e)
            raise DatabaseConnectionError("Unable to close database connection") from e

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for read-only work and release it on exit."""
        conn = self.acquire()
        try:
            yield conn
        finally:
            self.release(conn)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside ``BEGIN IMMEDIATE ... COMMIT``.

        Any exception rolls the transaction back.  ``sqlite3`` errors are
        wrapped in :class:`PersistenceError`; errors that are already
        ``AirlineError`` instances and non-database exceptions propagate
        unchanged.  The connection is released on every path, including
        a failed rollback.
        """
        conn = self.acquire()
        try:
            _execute(conn, "BEGIN IMMEDIATE")
            yield conn
            conn.commit()
            logger.info("Transaction succeeded")
        except Exception as exc:
            try:
                conn.rollback()
            except sqlite3.Error as rollback_error:
                logger.error("Rollback failed: %s", rollback_error)
            logger.error("Transaction failed: %s", exc)
            if isinstance(exc, sqlite3.Error):
                raise PersistenceError("Database access error") from exc
            raise
        finally:
            self.release(conn)


@contextmanager
def statement(
    connection: sqlite3.Connection, log: Optional[logging.Logger] = None
) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor on ``connection`` and always close it.

    Any ``sqlite3.Error`` raised while the cursor is in use is logged on
    ``log`` and re-raised as :class:`PersistenceError` (or
    :class:`DuplicateRecordError` for a unique index violation) with the
    original error as its cause.
    """
    log = log or logger
    cursor = None
    try:
        cursor = connection.cursor()
        yield cursor
    except sqlite3.IntegrityError as e:
        log.error("Failed to execute query: %s", e)
        if "UNIQUE" in str(e):
            raise DuplicateRecordError("Record already exists") from e
        raise PersistenceError("Failed to execute query") from e
    except sqlite3.Error as e:
        log.error("Failed to execute query: %s", e)
        raise PersistenceError("Failed to execute query") from e
    finally:
        if cursor is not None:
            cursor.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            login TEXT NOT NULL UNIQUE,
            full_name TEXT,
            is_admin INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS flights (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            aircraft_code TEXT NOT NULL,
            flight_number TEXT NOT NULL,
            departure_airport TEXT NOT NULL,
            arrival_airport TEXT NOT NULL,
            scheduled_departure TIMESTAMP NOT NULL,
            scheduled_arrival TIMESTAMP NOT NULL,
            price_per_seat REAL NOT NULL
        );

        CREATE TABLE IF NOT EXISTS luggage (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            luggage_type TEXT NOT NULL UNIQUE,
            price REAL NOT NULL
        );

        CREATE TABLE IF NOT EXISTS tickets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            ticket_number TEXT NOT NULL UNIQUE,
            user_id INTEGER NOT NULL,
            flight_id INTEGER NOT NULL,
            luggage_id INTEGER NOT NULL,
            total_price REAL NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id),
            FOREIGN KEY(flight_id) REFERENCES flights(id),
            FOREIGN KEY(luggage_id) REFERENCES luggage(id)
        );
        """,
    ),
    # Migration 2: indices used by flight search and ticket listing
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_flights_route ON flights(departure_airport, arrival_airport);
        CREATE INDEX IF NOT EXISTS idx_tickets_user_id ON tickets(user_id);
        """,
    ),
]


def init_db(provider: ConnectionProvider) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with provider.connection() as conn:
        with statement(conn) as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version
                    logger.info("Applied migration %s", version)
