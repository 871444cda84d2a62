"""Data access for the ``luggage`` table."""

import logging
import sqlite3
from typing import List, Optional

from airline_api.app.core.db import statement
from airline_api.app.schemas.luggage import Luggage, LuggageBase

logger = logging.getLogger(__name__)

_COLUMNS = "id, luggage_type, price"


class LuggageDAO:
    """Reads and writes luggage options."""

    def add(self, luggage: LuggageBase, connection: sqlite3.Connection) -> int:
        with statement(connection, logger) as cursor:
            cursor.execute(
                "INSERT INTO luggage (luggage_type, price) VALUES (?, ?)",
                (luggage.luggage_type, str(luggage.price)),
            )
            return cursor.lastrowid

    def update(self, luggage: Luggage, connection: sqlite3.Connection) -> int:
        """Overwrite type and price of ``luggage.id``; returns rows changed."""
        with statement(connection, logger) as cursor:
            cursor.execute(
                "UPDATE luggage SET luggage_type = ?, price = ? WHERE id = ?",
                (luggage.luggage_type, str(luggage.price), luggage.id),
            )
            return cursor.rowcount

    def get_by_id(self, luggage_id: int, connection: sqlite3.Connection) -> Optional[Luggage]:
        with statement(connection, logger) as cursor:
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM luggage WHERE id = ?",
                (luggage_id,),
            ).fetchone()
        return self._row_to_luggage(row) if row else None

    def get_by_type(self, luggage_type: str, connection: sqlite3.Connection) -> Optional[Luggage]:
        with statement(connection, logger) as cursor:
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM luggage WHERE luggage_type = ?",
                (luggage_type,),
            ).fetchone()
        return self._row_to_luggage(row) if row else None

    def exists_by_type(
        self,
        luggage_type: str,
        connection: sqlite3.Connection,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Return True if a row other than ``exclude_id`` uses ``luggage_type``."""
        with statement(connection, logger) as cursor:
            row = cursor.execute(
                "SELECT 1 FROM luggage WHERE luggage_type = ? AND id IS NOT ? LIMIT 1",
                (luggage_type, exclude_id),
            ).fetchone()
        return row is not None

    def get_all(self, connection: sqlite3.Connection) -> List[Luggage]:
        with statement(connection, logger) as cursor:
            rows = cursor.execute(
                f"SELECT {_COLUMNS} FROM luggage ORDER BY price ASC, id ASC"
            ).fetchall()
        return [self._row_to_luggage(row) for row in rows]

    def delete_by_id(self, luggage_id: int, connection: sqlite3.Connection) -> int:
        with statement(connection, logger) as cursor:
            cursor.execute("DELETE FROM luggage WHERE id = ?", (luggage_id,))
            return cursor.rowcount

    @staticmethod
    def _row_to_luggage(row: sqlite3.Row) -> Luggage:
        return Luggage(id=row["id"], luggage_type=row["luggage_type"], price=row["price"])
