"""Commands for administering luggage options."""

from typing import Optional

from pydantic import ValidationError

from airline_api.app.core.errors import LuggageNotUniqueError
from airline_api.app.schemas.keys import parse_row_id
from airline_api.app.schemas.luggage import Luggage, LuggageCreate

from .base import (
    DATA_ERRORS,
    INVALID_INPUT,
    LUGGAGE_ADD_SUCCESS,
    LUGGAGE_DELETE_SUCCESS,
    LUGGAGE_ID,
    LUGGAGE_NOT_FOUND,
    LUGGAGE_TYPE,
    LUGGAGE_UNIQUE_ERROR,
    LUGGAGE_UPDATE_SUCCESS,
    PRICE,
    BasicCommand,
    CommandRequest,
)


class CreateLuggageCommand(BasicCommand):
    """Create a luggage option unless its type is already taken."""

    def execute(self, request: CommandRequest) -> Optional[str]:
        try:
            luggage = LuggageCreate(
                luggage_type=request.get_parameter(LUGGAGE_TYPE),
                price=request.get_parameter(PRICE),
            )
        except ValidationError:
            request.attributes[INVALID_INPUT] = True
            return self.page("admin")
        service = self.context.luggage
        try:
            if service.is_unique_luggage(luggage):
                service.add_luggage(luggage)
                request.session[LUGGAGE_ADD_SUCCESS] = True
            else:
                request.attributes[LUGGAGE_UNIQUE_ERROR] = True
        except LuggageNotUniqueError:
            # Another request created the same type after our check.
            request.attributes[LUGGAGE_UNIQUE_ERROR] = True
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        return self.page("admin")


class UpdateLuggageCommand(BasicCommand):
    """Change type and price of an existing luggage option."""

    def execute(self, request: CommandRequest) -> Optional[str]:
        try:
            luggage = Luggage(
                id=request.get_parameter(LUGGAGE_ID),
                luggage_type=request.get_parameter(LUGGAGE_TYPE),
                price=request.get_parameter(PRICE),
            )
        except ValidationError:
            request.attributes[INVALID_INPUT] = True
            return self.page("admin")
        service = self.context.luggage
        try:
            if not service.is_unique_luggage(luggage):
                request.attributes[LUGGAGE_UNIQUE_ERROR] = True
            elif service.update_luggage(luggage):
                request.session[LUGGAGE_UPDATE_SUCCESS] = True
            else:
                request.attributes[LUGGAGE_NOT_FOUND] = True
        except LuggageNotUniqueError:
            request.attributes[LUGGAGE_UNIQUE_ERROR] = True
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        return self.page("admin")


class DeleteLuggageCommand(BasicCommand):

    def execute(self, request: CommandRequest) -> Optional[str]:
        luggage_id = parse_row_id(request.get_parameter(LUGGAGE_ID))
        if luggage_id is None:
            request.attributes[INVALID_INPUT] = True
            return self.page("admin")
        try:
            if self.context.luggage.delete_luggage(luggage_id):
                request.session[LUGGAGE_DELETE_SUCCESS] = True
            else:
                request.attributes[LUGGAGE_NOT_FOUND] = True
        except DATA_ERRORS as e:
            return self.database_error(request, e)
        return self.page("admin")
