"""Error codes and exception types shared by every layer."""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Machine-readable error codes."""

    DATABASE_ACCESS = "DATABASE_ACCESS"
    DUPLICATE_RECORD = "DUPLICATE_RECORD"
    CONNECTION = "CONNECTION"
    INVALID_TICKET = "INVALID_TICKET"
    TICKET_NUMBER_EXHAUSTED = "TICKET_NUMBER_EXHAUSTED"
    LUGGAGE_NOT_UNIQUE = "LUGGAGE_NOT_UNIQUE"
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"


class AirlineError(Exception):
    """Base error with a code and a user-safe message."""

    code: ErrorCode = ErrorCode.DATABASE_ACCESS

    def __init__(self, message: str, code: Optional[ErrorCode] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class PersistenceError(AirlineError):
    """Raised when a statement cannot be prepared, executed or read."""

    code = ErrorCode.DATABASE_ACCESS


class DuplicateRecordError(PersistenceError):
    """Raised when an insert violates a unique index."""

    code = ErrorCode.DUPLICATE_RECORD


class DatabaseConnectionError(AirlineError):
    """Raised when a connection cannot be acquired or released."""

    code = ErrorCode.CONNECTION


class TicketValidationError(AirlineError):
    """Raised when an incomplete ticket is handed over for persistence."""

    code = ErrorCode.INVALID_TICKET


class TicketNumberExhaustedError(PersistenceError):
    """Raised when no free ticket number was found within the attempt limit."""

    code = ErrorCode.TICKET_NUMBER_EXHAUSTED

    def __init__(self, attempts: int) -> None:
        super().__init__(f"No free ticket number after {attempts} attempts")
        self.attempts = attempts


class LuggageNotUniqueError(AirlineError):
    """Raised when another luggage row already uses the requested type."""

    code = ErrorCode.LUGGAGE_NOT_UNIQUE

    def __init__(self, luggage_type: str) -> None:
        super().__init__(f"Luggage type '{luggage_type}' already exists")
        self.luggage_type = luggage_type


class UnknownCommandError(AirlineError):
    """Raised when a request names no registered command."""

    code = ErrorCode.UNKNOWN_COMMAND

    def __init__(self, name: Optional[str]) -> None:
        super().__init__(f"Unknown command: {name!r}")
        self.name = name
