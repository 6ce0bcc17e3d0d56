"""Core enums for the mst engine."""

from enum import StrEnum


class Tier(StrEnum):
    """Model tier levels."""

    LOW = "low"
    MED = "med"
    HIGH = "high"


class RunStatus(StrEnum):
    """Status of a single execution run."""

    RUNNING = "running"
    GOAL_REACHED = "goal_reached"
    FAULTED = "faulted"


class FaultReason(StrEnum):
    """Reason codes reported with a FAULTED run."""

    INVALID_TRANSITION = "invalid_transition"
    ORACLE_ERROR = "oracle_error"
    ORACLE_RETRIES_EXHAUSTED = "oracle_retries_exhausted"
    NO_SUCCESSOR_DEFINED = "no_successor_defined"
    ITERATION_CAP_EXCEEDED = "iteration_cap_exceeded"
    CANCELLED = "cancelled"
