"""
Request commands.

A request names the command to run in its ``command`` parameter.
``CommandsFactory`` maps that name to one of the commands defined in
this package and ``RequestHandler`` runs it and turns the returned
page into a forward, or into a redirect to the index page when the
command returns ``None`` or the name is unknown.
"""

from .base import BasicCommand, CommandRequest
from .dispatcher import DispatchOutcome, RequestHandler
from .factory import CommandName, CommandsFactory

__all__ = [
    "BasicCommand",
    "CommandName",
    "CommandRequest",
    "CommandsFactory",
    "DispatchOutcome",
    "RequestHandler",
]
