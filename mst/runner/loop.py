"""Execution loop driving a state machine to a terminal status.

Each iteration runs the instruction set, asks the transition policy for the
next state unless an instruction already moved the machine, transitions, and
checks the goal. Runs end GOAL_REACHED or FAULTED with a reason code; the
iteration cap and an optional cancel event bound otherwise endless cycles.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from mst.core.constants import ENGINE
from mst.core.enums import FaultReason, RunStatus
from mst.core.errors import (
    ConfigurationError,
    InvalidTransitionError,
    NoSuccessorDefinedError,
    OracleError,
    OracleRetriesExhaustedError,
)

if TYPE_CHECKING:
    from mst.machine.instruction import InstructionFailure
    from mst.machine.machine import StateMachine
    from mst.policy.base import TransitionDecision, TransitionPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackEvent:
    """An oracle candidate replaced by the fallback resolver."""

    iteration: int
    from_state: str
    candidate: str
    resolved: str
    wrapped: bool = False
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())


@dataclass
class RunResult:
    """Terminal outcome of one run."""

    status: RunStatus
    final_state: str
    trace: list[str]
    visited_states: list[str]
    iterations: int
    reason: FaultReason | None = None
    error: str | None = None
    instruction_failures: list[InstructionFailure] = field(default_factory=list)
    fallback_events: list[FallbackEvent] = field(default_factory=list)

    @property
    def goal_reached(self) -> bool:
        return self.status == RunStatus.GOAL_REACHED


class _Run:
    """Mutable bookkeeping for a run in progress."""

    def __init__(self, machine: StateMachine) -> None:
        self.machine = machine
        self.iterations = 0
        self.fallback_events: list[FallbackEvent] = []

    def record(self, decision: TransitionDecision, from_state: str) -> None:
        if decision.fell_back:
            self.fallback_events.append(
                FallbackEvent(
                    iteration=self.iterations,
                    from_state=from_state,
                    candidate=decision.candidate,
                    resolved=decision.state,
                    wrapped=decision.wrapped,
                )
            )

    def finish(
        self,
        status: RunStatus,
        reason: FaultReason | None = None,
        error: BaseException | str | None = None,
    ) -> RunResult:
        machine = self.machine
        result = RunResult(
            status=status,
            final_state=machine.state,
            trace=list(machine.history),
            visited_states=list(machine.visited_in_order),
            iterations=self.iterations,
            reason=reason,
            error=str(error) if error is not None else None,
            instruction_failures=machine.instruction_failures,
            fallback_events=list(self.fallback_events),
        )
        if status == RunStatus.GOAL_REACHED:
            logger.info(
                "Goal reached after %d iterations. Final state: %s",
                self.iterations,
                machine.state,
            )
        else:
            logger.error(
                "Run faulted (%s) after %d iterations in state %s: %s",
                reason,
                self.iterations,
                machine.state,
                result.error,
            )
        return result


async def _pause(step_delay: float, cancel_event: asyncio.Event | None) -> None:
    """Sleep between iterations, waking early if the run is cancelled."""
    if step_delay <= 0:
        return
    if cancel_event is None:
        await asyncio.sleep(step_delay)
        return
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=step_delay)
    except TimeoutError:
        pass


async def run_machine(
    machine: StateMachine,
    policy: TransitionPolicy | None = None,
    *,
    max_iterations: int = ENGINE.max_iterations,
    cancel_event: asyncio.Event | None = None,
    step_delay: float = ENGINE.step_delay,
) -> RunResult:
    """Drive ``machine`` until its goal holds or the run faults.

    Args:
        machine: Machine to run. Mutated in place.
        policy: Transition policy; defaults to the one in the machine config.
        max_iterations: Iteration cap; exceeding it faults the run.
        cancel_event: Checked at the top of every iteration.
        step_delay: Seconds to pause between iterations.

    Returns:
        RunResult with terminal status, reason code and trace.

    Raises:
        ConfigurationError: If no policy is available or the cap is invalid.
    """
    policy = policy or machine.transition_policy
    if policy is None:
        raise ConfigurationError("No transition policy configured for this machine")
    if max_iterations < 1:
        raise ConfigurationError("max_iterations must be at least 1")

    run = _Run(machine)
    logger.info(
        "Starting run in state %s (policy: %s, max iterations: %d)",
        machine.state,
        policy.name,
        max_iterations,
    )

    if machine.goal_reached():
        return run.finish(RunStatus.GOAL_REACHED)

    while True:
        if cancel_event is not None and cancel_event.is_set():
            return run.finish(RunStatus.FAULTED, FaultReason.CANCELLED, "cancelled")
        if run.iterations >= max_iterations:
            return run.finish(
                RunStatus.FAULTED,
                FaultReason.ITERATION_CAP_EXCEEDED,
                f"exceeded {max_iterations} iterations",
            )

        run.iterations += 1
        logger.debug("Iteration %d in state %s", run.iterations, machine.state)

        try:
            report = await machine.execute_instructions()

            if report.transitioned:
                logger.info(
                    "Instruction moved machine to %s; skipping policy transition",
                    machine.state,
                )
            else:
                from_state = machine.state
                decision = await policy.next_state(machine)
                run.record(decision, from_state)
                machine.transition(decision.state)
        except InvalidTransitionError as e:
            return run.finish(RunStatus.FAULTED, FaultReason.INVALID_TRANSITION, e)
        except NoSuccessorDefinedError as e:
            return run.finish(RunStatus.FAULTED, FaultReason.NO_SUCCESSOR_DEFINED, e)
        except OracleRetriesExhaustedError as e:
            return run.finish(
                RunStatus.FAULTED, FaultReason.ORACLE_RETRIES_EXHAUSTED, e
            )
        except OracleError as e:
            return run.finish(RunStatus.FAULTED, FaultReason.ORACLE_ERROR, e)

        if machine.goal_reached():
            return run.finish(RunStatus.GOAL_REACHED)

        if not policy.has_successor(machine.state):
            return run.finish(
                RunStatus.FAULTED,
                FaultReason.NO_SUCCESSOR_DEFINED,
                NoSuccessorDefinedError(machine.state),
            )

        await _pause(step_delay, cancel_event)
