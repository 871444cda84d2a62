"""
Business logic for user accounts.

The booking core only reads accounts: tickets are issued for the user
identified by ``login``.  ``add_user`` exists for provisioning and for
tests.
"""

import logging
from typing import List, Optional

from airline_api.app.core.db import ConnectionProvider
from airline_api.app.dao.user_dao import UserDAO
from airline_api.app.schemas.user import User, UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """Lookups and uniqueness checks for user accounts."""

    def __init__(self, provider: ConnectionProvider, dao: Optional[UserDAO] = None) -> None:
        self._provider = provider
        self._dao = dao or UserDAO()

    def get_user_by_login(self, login: Optional[str]) -> Optional[User]:
        """Return the user with ``login`` or ``None`` if there is no such user."""
        if not login:
            return None
        with self._provider.connection() as conn:
            return self._dao.get_by_login(login, conn)

    def is_unique_login(self, login: str) -> bool:
        with self._provider.connection() as conn:
            return not self._dao.exists_by_login(login, conn)

    def get_all_users(self) -> List[User]:
        with self._provider.connection() as conn:
            return self._dao.get_all(conn)

    def add_user(self, data: UserCreate) -> User:
        """Insert a new user and return it with its id."""
        with self._provider.transaction() as conn:
            user_id = self._dao.add(data, conn)
        logger.info("Registered user %s", data.login)
        return User(id=user_id, **data.model_dump())
