"""
Read-only catalogue endpoints for API v1.

These routes list the flights and luggage options customers can
choose from when building a ticket.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Request, status

from airline_api.app.core.errors import DatabaseConnectionError, PersistenceError
from airline_api.app.schemas.flight import Flight
from airline_api.app.schemas.luggage import Luggage

router = APIRouter()


@router.get("/flights", response_model=List[Flight])
def list_flights(request: Request) -> List[Flight]:
    try:
        return request.app.state.context.flights.get_all_flights()
    except (PersistenceError, DatabaseConnectionError) as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e


@router.get("/luggage", response_model=List[Luggage])
def list_luggage(request: Request) -> List[Luggage]:
    try:
        return request.app.state.context.luggage.get_all_luggage()
    except (PersistenceError, DatabaseConnectionError) as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}
