"""Scenario catalog: named machine configurations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from mst.config import get_oracle
from mst.core.errors import ConfigurationError
from mst.machine import StateMachine, StateMachineConfig
from mst.scenarios.catalog import (
    customer_support_config,
    ecommerce_purchase_config,
    medical_diagnosis_config,
    software_development_config,
)
from mst.scenarios.plan import Plan, PlanStep, parse_plan
from mst.scenarios.problem_solving import (
    INITIAL_PROBLEM,
    ProblemState,
    problem_solving_config,
)

if TYPE_CHECKING:
    from mst.oracle import Oracle

SCENARIOS: dict[str, Callable[[Oracle], StateMachineConfig]] = {
    "customerSupport": customer_support_config,
    "softwareDevelopment": software_development_config,
    "ecommercePurchase": ecommerce_purchase_config,
    "medicalDiagnosis": medical_diagnosis_config,
    "problemSolving": problem_solving_config,
}


def create_state_machine(kind: str, *, oracle: Oracle | None = None) -> StateMachine:
    """Build a machine for a named scenario.

    Args:
        kind: Scenario name (see SCENARIOS).
        oracle: Decision oracle; defaults to the cached Claude oracle.

    Raises:
        ConfigurationError: If the scenario is unknown.
    """
    factory = SCENARIOS.get(kind)
    if factory is None:
        raise ConfigurationError(f"Unknown state machine type: {kind}")

    if oracle is None:
        oracle = get_oracle()

    return StateMachine(factory(oracle))


__all__ = [
    "INITIAL_PROBLEM",
    "SCENARIOS",
    "Plan",
    "PlanStep",
    "ProblemState",
    "create_state_machine",
    "parse_plan",
]
