"""Static successor-map transition policy."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from mst.core.errors import ConfigurationError, NoSuccessorDefinedError
from mst.policy.base import TransitionDecision

if TYPE_CHECKING:
    from mst.machine.machine import StateMachine

logger = logging.getLogger(__name__)


class TablePolicy:
    """Looks the current state up in a fixed state -> state map."""

    name = "table"

    def __init__(self, successors: Mapping[str, str]) -> None:
        self._successors = dict(successors)

    @property
    def successors(self) -> dict[str, str]:
        return dict(self._successors)

    def validate(self, possible_states: Sequence[str]) -> None:
        catalog = set(possible_states)
        unknown = sorted(
            {s for pair in self._successors.items() for s in pair} - catalog
        )
        if unknown:
            raise ConfigurationError(
                f"Transition table references unknown states: {unknown}"
            )

    def has_successor(self, state: str) -> bool:
        return state in self._successors

    async def next_state(self, machine: StateMachine) -> TransitionDecision:
        """Return the mapped successor of the current state.

        Raises:
            NoSuccessorDefinedError: If the current state has no entry.
        """
        try:
            successor = self._successors[machine.state]
        except KeyError:
            raise NoSuccessorDefinedError(machine.state) from None
        logger.debug("Table transition: %s -> %s", machine.state, successor)
        return TransitionDecision(state=successor, candidate=successor)

    def __repr__(self) -> str:
        return f"TablePolicy({self._successors!r})"
