"""Instruction and step-report models."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mst.core.errors import InstructionActionError
    from mst.machine.machine import StateMachine

Condition = Callable[["StateMachine"], bool]
Action = Callable[["StateMachine"], Awaitable[None] | None]


@dataclass(frozen=True)
class Instruction:
    """A conditional side-effecting action evaluated on every step.

    Attributes:
        condition: Pure predicate over the machine's current snapshot.
        action: Sync or async procedure over the machine. May read and write
            context and may call ``transition()`` directly.
        description: Human-readable label, surfaced in oracle prompts.
    """

    condition: Condition
    action: Action
    description: str


def in_state(state: str) -> Condition:
    """Condition that holds while the machine is in ``state``."""

    def condition(machine: StateMachine) -> bool:
        return machine.state == state

    return condition


@dataclass(frozen=True)
class InstructionFailure:
    """Record of an instruction action that raised."""

    description: str
    state: str
    error_type: str
    message: str
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def from_error(cls, error: InstructionActionError) -> InstructionFailure:
        return cls(
            description=error.description,
            state=error.state,
            error_type=type(error.cause).__name__,
            message=str(error.cause),
        )

    def __str__(self) -> str:
        return f"[{self.state}] {self.description}: {self.error_type}: {self.message}"


@dataclass
class StepReport:
    """Outcome of one instruction pass."""

    executed: list[str] = field(default_factory=list)
    failures: list[InstructionFailure] = field(default_factory=list)
    transitioned: bool = False
