"""Login and logout commands.

Authentication is out of scope: logging in only checks that the login
exists and remembers it in the session.
"""

from typing import Optional

from .base import (
    DATA_ERRORS,
    LOGIN,
    LOGIN_ERROR,
    SESSION_LOGIN,
    BasicCommand,
    CommandRequest,
)


class LoginCommand(BasicCommand):

    def execute(self, request: CommandRequest) -> Optional[str]:
        login = request.get_parameter(LOGIN)
        try:
            user = self.context.users.get_user_by_login(login)
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        if user is None:
            request.attributes[LOGIN_ERROR] = True
            return self.page("index")
        request.session[SESSION_LOGIN] = user.login
        self.logger.info("User %s logged in", user.login)
        return self.page("admin") if user.is_admin else self.page("user")


class LogoutCommand(BasicCommand):

    def execute(self, request: CommandRequest) -> Optional[str]:
        login = request.session.get(SESSION_LOGIN)
        request.session.clear()
        self.logger.info("User %s logged out", login)
        return self.page("index")
