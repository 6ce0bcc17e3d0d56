"""Core configuration, enums and errors for mst.

The leaf modules (enums, errors, constants, env) have no imports from other
mst modules outside core/.
"""

from mst.core.constants import ENGINE, ORACLE, RETENTION
from mst.core.enums import FaultReason, RunStatus, Tier
from mst.core.errors import (
    ConfigurationError,
    ContextTypeError,
    InstructionActionError,
    InvalidTransitionError,
    MissingContextKeyError,
    MSTError,
    NoSuccessorDefinedError,
    OracleError,
    OracleRetriesExhaustedError,
)

__all__ = [
    "ENGINE",
    "ORACLE",
    "RETENTION",
    "ConfigurationError",
    "ContextTypeError",
    "FaultReason",
    "InstructionActionError",
    "InvalidTransitionError",
    "MSTError",
    "MissingContextKeyError",
    "NoSuccessorDefinedError",
    "OracleError",
    "OracleRetriesExhaustedError",
    "RunStatus",
    "Tier",
]
