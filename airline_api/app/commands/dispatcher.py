"""
Request dispatch.

``RequestHandler.process_request`` runs the command named by a request
once and decides where the user goes next: forward to the page the
command returned, or redirect to the index page when the command
returned ``None`` or the request named no known command.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from airline_api.app.core.config import Settings
from airline_api.app.core.errors import UnknownCommandError

from .base import CommandRequest
from .factory import CommandsFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchOutcome:
    destination: str
    redirect: bool = False
    attributes: Dict[str, Any] = field(default_factory=dict)


class RequestHandler:

    def __init__(self, factory: CommandsFactory, config: Settings) -> None:
        self._factory = factory
        self._config = config

    def process_request(self, request: CommandRequest) -> DispatchOutcome:
        try:
            command = self._factory.define_command(request)
        except UnknownCommandError as e:
            logger.warning("%s; redirecting to the index page", e)
            return self._redirect_to_index()
        page = command.execute(request)
        if page is not None:
            return DispatchOutcome(destination=page, attributes=request.attributes)
        return self._redirect_to_index()

    def _redirect_to_index(self) -> DispatchOutcome:
        return DispatchOutcome(destination=self._config.page("index"), redirect=True)
