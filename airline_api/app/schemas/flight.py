"""
Pydantic models for scheduled flights.

A flight links two airport codes with departure and arrival times and
a per-seat price.  The combination of flight number, route and time
is not guaranteed to be unique.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .keys import ROW_ID_MAX, ROW_ID_MIN
from .money import to_money


class FlightBase(BaseModel):
    aircraft_code: str = Field(..., min_length=1, examples=["B738"])
    flight_number: str = Field(..., min_length=1, examples=["PS101"])
    departure_airport: str = Field(..., min_length=3, max_length=4, examples=["MSQ"])
    arrival_airport: str = Field(..., min_length=3, max_length=4, examples=["VNO"])
    scheduled_departure: dt.datetime
    scheduled_arrival: dt.datetime
    price_per_seat: Decimal = Field(..., ge=0, examples=["120.00"])

    @field_validator("price_per_seat", mode="before")
    @classmethod
    def _quantize_price(cls, value):
        return to_money(value)


class FlightCreate(FlightBase):
    """Schema for scheduling a flight."""
    pass


class Flight(FlightBase):
    """A stored flight."""

    id: int = Field(..., ge=ROW_ID_MIN, le=ROW_ID_MAX)

    model_config = {
        "from_attributes": True,
    }


class FlightSearch(BaseModel):
    """Search criteria.

    ``departure_airport`` is required.  With ``arrival_airport`` and/or
    ``departure_date`` the search is narrowed accordingly.
    """

    departure_airport: str = Field(..., min_length=1)
    arrival_airport: Optional[str] = None
    departure_date: Optional[dt.date] = None
