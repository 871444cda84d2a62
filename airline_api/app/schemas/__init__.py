"""
Pydantic models for the booking domain.

Each entity (user, flight, luggage, ticket) defines its own model.
The DAO layer translates rows to these models and back; models never
hold a database connection.
"""
