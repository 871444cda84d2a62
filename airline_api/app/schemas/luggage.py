"""
Pydantic models for luggage options.

A luggage option is a priced category that can be attached to a
ticket.  Categories are unique by ``luggage_type``.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from .keys import ROW_ID_MAX, ROW_ID_MIN
from .money import to_money


class LuggageBase(BaseModel):
    luggage_type: str = Field(..., min_length=1, examples=["cabin 10kg"])
    price: Decimal = Field(..., ge=0, examples=["15.50"])

    @field_validator("luggage_type")
    @classmethod
    def _strip_type(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("luggage_type must not be blank")
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _quantize_price(cls, value):
        return to_money(value)


class LuggageCreate(LuggageBase):
    """Schema for creating a luggage option."""
    pass


class Luggage(LuggageBase):
    """A stored luggage option."""

    id: int = Field(..., ge=ROW_ID_MIN, le=ROW_ID_MAX)

    model_config = {
        "from_attributes": True,
    }
