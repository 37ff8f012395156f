"""
Exception hierarchy for the Challonge client.

Every failure the library can produce derives from ChallongeError so callers
can catch the whole family with a single except clause.  Nothing here ever
terminates the process; the CLI decides what an error means for the exit code.
"""

from __future__ import annotations


class ChallongeError(Exception):
    """Base exception for all client errors."""


class TransportError(ChallongeError):
    """Raised when a request never produced a usable JSON response."""

    def __init__(
        self,
        operation: str,
        message: str,
        status: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.operation = operation
        self.status = status
        self.cause = cause
        detail = f"HTTP {status}: {message}" if status is not None else message
        super().__init__(f"[{operation}] {detail}")


class APIError(ChallongeError):
    """Raised when the service answered with a non-empty errors list."""

    def __init__(self, operation: str, errors: list[str]) -> None:
        self.operation = operation
        self.errors = list(errors)
        super().__init__(f"unable to {operation}: {self.message!r}")

    @property
    def message(self) -> str:
        return self.errors[0] if self.errors else ""


class TournamentStateError(ChallongeError):
    """Raised when a tournament is not in the state an operation requires."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"tournament has state {actual!r}, expected {expected!r}")


class ParticipantNotFoundError(ChallongeError):
    """Raised when a participant lookup by name finds nothing."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"participant with name {name!r} not found in tournament")
