"""
Pydantic model for issued tickets.

A ticket aggregates one user, one flight and one luggage option with
a unique ticket number and the total price.  ``TicketService`` builds
it in memory from a flat mapping of request values.  When any of the
references could not be resolved the ticket is returned partially
filled; callers check ``is_valid`` before persisting it.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_validator

from .flight import Flight
from .luggage import Luggage
from .money import to_money
from .user import User


class Ticket(BaseModel):
    id: Optional[int] = None
    ticket_number: Optional[str] = None
    user: Optional[User] = None
    flight: Optional[Flight] = None
    luggage: Optional[Luggage] = None
    total_price: Optional[Decimal] = None

    # Tickets are never mutated in place once built.
    model_config = {
        "frozen": True,
    }

    @field_validator("total_price", mode="before")
    @classmethod
    def _quantize_total(cls, value):
        return None if value is None else to_money(value)

    @property
    def is_valid(self) -> bool:
        """True when every reference resolved and a number was assigned."""
        return (
            self.user is not None
            and self.flight is not None
            and self.luggage is not None
            and bool(self.ticket_number)
            and self.total_price is not None
        )
