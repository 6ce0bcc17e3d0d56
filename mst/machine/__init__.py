"""State machine entity, instructions and configuration."""

from mst.machine.config import GoalPredicate, StateMachineConfig, visited
from mst.machine.instruction import (
    Instruction,
    InstructionFailure,
    StepReport,
    in_state,
)
from mst.machine.machine import MachineSnapshot, StateMachine

__all__ = [
    "GoalPredicate",
    "Instruction",
    "InstructionFailure",
    "MachineSnapshot",
    "StateMachine",
    "StateMachineConfig",
    "StepReport",
    "in_state",
    "visited",
]
