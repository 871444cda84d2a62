"""Data access for the ``users`` table."""

import logging
import sqlite3
from typing import List, Optional

from airline_api.app.core.db import statement
from airline_api.app.schemas.user import User, UserCreate

logger = logging.getLogger(__name__)


class UserDAO:
    """Reads and writes user accounts."""

    def add(self, user: UserCreate, connection: sqlite3.Connection) -> int:
        with statement(connection, logger) as cursor:
            cursor.execute(
                "INSERT INTO users (login, full_name, is_admin) VALUES (?, ?, ?)",
                (user.login, user.full_name, int(user.is_admin)),
            )
            return cursor.lastrowid

    def get_by_id(self, user_id: int, connection: sqlite3.Connection) -> Optional[User]:
        with statement(connection, logger) as cursor:
            row = cursor.execute(
                "SELECT id, login, full_name, is_admin FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        return self._row_to_user(row) if row else None

    def get_by_login(self, login: str, connection: sqlite3.Connection) -> Optional[User]:
        """Return the user with ``login`` or ``None`` when there is none."""
        with statement(connection, logger) as cursor:
            row = cursor.execute(
                "SELECT id, login, full_name, is_admin FROM users WHERE login = ?",
                (login,),
            ).fetchone()
        return self._row_to_user(row) if row else None

    def exists_by_login(self, login: str, connection: sqlite3.Connection) -> bool:
        with statement(connection, logger) as cursor:
            row = cursor.execute(
                "SELECT 1 FROM users WHERE login = ? LIMIT 1",
                (login,),
            ).fetchone()
        return row is not None

    def get_all(self, connection: sqlite3.Connection) -> List[User]:
        with statement(connection, logger) as cursor:
            rows = cursor.execute(
                "SELECT id, login, full_name, is_admin FROM users ORDER BY login"
            ).fetchall()
        return [self._row_to_user(row) for row in rows]

    def delete_by_id(self, user_id: int, connection: sqlite3.Connection) -> int:
        with statement(connection, logger) as cursor:
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            return cursor.rowcount

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            login=row["login"],
            full_name=row["full_name"],
            is_admin=bool(row["is_admin"]),
        )
