"""Exception hierarchy for the mst engine.

Fatal conditions propagate to the execution loop, which maps each one to a
FaultReason. Instruction failures are isolated and never reach the loop.
"""

from __future__ import annotations


class MSTError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(MSTError):
    """Raised when a state machine configuration is malformed."""


class InvalidTransitionError(MSTError):
    """Raised when a transition targets a state outside the catalog."""

    def __init__(self, from_state: str, to_state: str) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid state transition to {to_state!r} from {from_state!r}")


class NoSuccessorDefinedError(MSTError):
    """Raised when a transition table has no entry for the current state."""

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(f"No transition defined for state: {state}")


class OracleError(MSTError):
    """Raised when the decision oracle fails (transport, auth, rate limit)."""


class OracleRetriesExhaustedError(OracleError):
    """Raised when every retry attempt against the oracle failed."""

    def __init__(self, attempts: int, last_error: BaseException | None = None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Oracle failed after {attempts} attempts: {last_error}")


class InstructionActionError(MSTError):
    """Wraps an exception raised inside an instruction action."""

    def __init__(self, description: str, state: str, cause: BaseException) -> None:
        self.description = description
        self.state = state
        self.cause = cause
        super().__init__(
            f"Instruction {description!r} failed in state {state!r}: "
            f"{type(cause).__name__}: {cause}"
        )


class MissingContextKeyError(MSTError, KeyError):
    """Raised when an instruction reads a context key that was never set."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Missing context key: {self.key}"


class ContextTypeError(MSTError, TypeError):
    """Raised when a context value does not have the expected type."""

    def __init__(self, key: str, expected: type, actual: type) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Context key {key!r} expected {expected.__name__}, got {actual.__name__}"
        )
