"""
Business logic for luggage options.

Luggage categories are unique by ``luggage_type``.  Commands first ask
``is_unique_luggage`` so they can show a friendly message; the write
methods then repeat the check inside the same ``BEGIN IMMEDIATE``
transaction as the insert or update, so two concurrent creations of
the same category cannot both succeed.  The ``luggage`` table also
carries a UNIQUE index on the column.
"""

import logging
from typing import List, Optional

from airline_api.app.core.db import ConnectionProvider
from airline_api.app.core.errors import DuplicateRecordError, LuggageNotUniqueError
from airline_api.app.dao.luggage_dao import LuggageDAO
from airline_api.app.schemas.luggage import Luggage, LuggageBase, LuggageCreate

logger = logging.getLogger(__name__)


class LuggageService:
    """Service for managing luggage options."""

    def __init__(self, provider: ConnectionProvider, dao: Optional[LuggageDAO] = None) -> None:
        self._provider = provider
        self._dao = dao or LuggageDAO()

    def get_luggage_by_id(self, luggage_id: int) -> Optional[Luggage]:
        with self._provider.connection() as conn:
            return self._dao.get_by_id(luggage_id, conn)

    def get_all_luggage(self) -> List[Luggage]:
        with self._provider.connection() as conn:
            return self._dao.get_all(conn)

    def is_unique_luggage(self, luggage: LuggageBase) -> bool:
        """Return True if no other luggage row uses ``luggage.luggage_type``.

        For a stored ``Luggage`` the row itself is ignored, so renaming a
        category to its current name counts as unique.
        """
        exclude_id = getattr(luggage, "id", None)
        with self._provider.connection() as conn:
            return not self._dao.exists_by_type(luggage.luggage_type, conn, exclude_id)

    def add_luggage(self, data: LuggageCreate) -> Luggage:
        """Insert a new luggage option.

        Raises
        ------
        LuggageNotUniqueError
            If the type is already taken when the transaction runs.
        """
        try:
            with self._provider.transaction() as conn:
                if self._dao.exists_by_type(data.luggage_type, conn):
                    raise LuggageNotUniqueError(data.luggage_type)
                luggage_id = self._dao.add(data, conn)
        except DuplicateRecordError as e:
            raise LuggageNotUniqueError(data.luggage_type) from e
        logger.info("Created luggage %s (%s)", data.luggage_type, luggage_id)
        return Luggage(id=luggage_id, luggage_type=data.luggage_type, price=data.price)

    def update_luggage(self, luggage: Luggage) -> bool:
        """Update type and price; returns False when the row does not exist."""
        try:
            with self._provider.transaction() as conn:
                if self._dao.exists_by_type(luggage.luggage_type, conn, luggage.id):
                    raise LuggageNotUniqueError(luggage.luggage_type)
                updated = self._dao.update(luggage, conn)
        except DuplicateRecordError as e:
            raise LuggageNotUniqueError(luggage.luggage_type) from e
        if updated:
            logger.info("Updated luggage %s", luggage.id)
        return updated > 0

    def delete_luggage(self, luggage_id: int) -> bool:
        with self._provider.transaction() as conn:
            deleted = self._dao.delete_by_id(luggage_id, conn)
        return deleted > 0
