"""mst - instruction-driven state machines with oracle-chosen transitions."""

from mst.core import FaultReason, RunStatus
from mst.core.errors import (
    ConfigurationError,
    InvalidTransitionError,
    MissingContextKeyError,
    MSTError,
    NoSuccessorDefinedError,
    OracleError,
)
from mst.machine import Instruction, StateMachine, StateMachineConfig, in_state, visited
from mst.policy import OraclePolicy, TablePolicy, default_next_state
from mst.runner import RunResult, run_machine

__all__ = [
    "ConfigurationError",
    "FaultReason",
    "Instruction",
    "InvalidTransitionError",
    "MSTError",
    "MissingContextKeyError",
    "NoSuccessorDefinedError",
    "OracleError",
    "OraclePolicy",
    "RunResult",
    "RunStatus",
    "StateMachine",
    "StateMachineConfig",
    "TablePolicy",
    "default_next_state",
    "in_state",
    "run_machine",
    "visited",
]
