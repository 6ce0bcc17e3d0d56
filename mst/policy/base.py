"""Transition policy protocol and decision record."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mst.machine.machine import StateMachine


@dataclass(frozen=True)
class TransitionDecision:
    """Next state chosen by a policy for one step.

    Attributes:
        state: The legal state to transition to.
        candidate: Raw candidate the policy produced before validation.
        fell_back: Whether the fallback resolver replaced the candidate.
        wrapped: Whether the fallback wrapped to the first catalog entry
            because every state had already been visited.
    """

    state: str
    candidate: str
    fell_back: bool = False
    wrapped: bool = False


class TransitionPolicy(Protocol):
    """Strategy producing the next state for a machine."""

    name: str

    def validate(self, possible_states: Sequence[str]) -> None:
        """Check the policy against a state catalog.

        Raises:
            ConfigurationError: If the policy references unknown states.
        """
        ...

    def has_successor(self, state: str) -> bool:
        """Whether the policy can produce a next state from ``state``."""
        ...

    async def next_state(self, machine: StateMachine) -> TransitionDecision:
        """Produce the next state for ``machine``."""
        ...
