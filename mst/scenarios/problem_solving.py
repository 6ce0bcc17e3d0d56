"""Problem-solving scenario.

Runs a fixed six-stage cycle (analysis, planning, execution, evaluation,
learning, reformulation) over a transition table. Every stage's instruction
asks the oracle for a sub-task answer and folds it into a ProblemState kept
in the machine context. Reformulating the problem restarts the cycle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from mst.machine import Instruction, StateMachineConfig, in_state
from mst.policy import TablePolicy
from mst.scenarios.plan import Plan, parse_plan

if TYPE_CHECKING:
    from collections.abc import Set

    from mst.machine import StateMachine
    from mst.oracle import Oracle

logger = logging.getLogger(__name__)

PROBLEM_ANALYSIS = "ProblemAnalysis"
PLAN_FORMULATION = "PlanFormulation"
PLAN_EXECUTION = "PlanExecution"
RESULT_EVALUATION = "ResultEvaluation"
KNOWLEDGE_INTEGRATION = "KnowledgeIntegration"
PROBLEM_REFORMULATION = "ProblemReformulation"

STATES = [
    PROBLEM_ANALYSIS,
    PLAN_FORMULATION,
    PLAN_EXECUTION,
    RESULT_EVALUATION,
    KNOWLEDGE_INTEGRATION,
    PROBLEM_REFORMULATION,
]

TRANSITIONS = {
    PROBLEM_ANALYSIS: PLAN_FORMULATION,
    PLAN_FORMULATION: PLAN_EXECUTION,
    PLAN_EXECUTION: RESULT_EVALUATION,
    RESULT_EVALUATION: KNOWLEDGE_INTEGRATION,
    KNOWLEDGE_INTEGRATION: PROBLEM_REFORMULATION,
    PROBLEM_REFORMULATION: PROBLEM_ANALYSIS,
}

CONTEXT_PROMPT = (
    "You are an intelligent agent capable of solving complex problems "
    "through analysis, planning, execution, and learning."
)

SUCCESS_MARKERS = ("problem solved", "goal achieved")

# Context keys
INITIAL_PROBLEM = "initial_problem"
PROBLEM_STATE = "problem_state"
PROBLEM_ANALYSIS_KEY = "problem_analysis"
RESULT_EVALUATION_KEY = "result_evaluation"


class ProblemState(BaseModel):
    """Accumulated progress on the problem."""

    problem_description: str
    current_plan: Plan = Field(default_factory=Plan)
    execution_results: list[str] = Field(default_factory=list)
    learnings: list[str] = Field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"problem={self.problem_description!r}, "
            f"pending_steps={len(self.current_plan.steps)}, "
            f"results={len(self.execution_results)}, "
            f"learnings={len(self.learnings)}"
        )


def problem_solved(visited_states: Set[str], machine: StateMachine) -> bool:
    """Goal: some learning reports the problem as solved."""
    state = machine.get_data(PROBLEM_STATE)
    if not isinstance(state, ProblemState):
        return False
    return any(
        marker in learning.lower()
        for learning in state.learnings
        for marker in SUCCESS_MARKERS
    )


class ProblemSolvingActions:
    """Instruction actions bound to one oracle."""

    def __init__(self, oracle: Oracle) -> None:
        self._oracle = oracle

    async def analyze(self, machine: StateMachine) -> None:
        existing = machine.get_data(PROBLEM_STATE)
        if isinstance(existing, ProblemState):
            problem_state = existing
        else:
            problem_state = ProblemState(
                problem_description=machine.require_data(INITIAL_PROBLEM, str)
            )

        analysis = await self._oracle(
            "Analyze the following problem and break it down into key components: "
            f"{problem_state.problem_description}"
        )
        logger.info("Problem analysis: %s", analysis[:200])
        machine.set_data(PROBLEM_STATE, problem_state)
        machine.set_data(PROBLEM_ANALYSIS_KEY, analysis)

    async def formulate_plan(self, machine: StateMachine) -> None:
        problem_state = machine.require_data(PROBLEM_STATE, ProblemState)
        analysis = machine.require_data(PROBLEM_ANALYSIS_KEY, str)

        text = await self._oracle(
            f"Based on this analysis: {analysis}, formulate a step-by-step plan "
            f"to solve the problem: {problem_state.problem_description}"
        )
        if not text.strip():
            logger.error("Plan is empty or invalid")
            return

        problem_state.current_plan = parse_plan(text)
        machine.set_data(PROBLEM_STATE, problem_state)
        logger.info("Parsed plan with %d steps", len(problem_state.current_plan.steps))

    async def execute_step(self, machine: StateMachine) -> None:
        problem_state = machine.require_data(PROBLEM_STATE, ProblemState)
        step = problem_state.current_plan.pop_next()
        if step is None:
            logger.info("No pending plan steps to execute")
            return

        outcome = await self._oracle(
            f"Execute this step and describe the outcome: {step}"
        )
        problem_state.execution_results.append(outcome)
        machine.set_data(PROBLEM_STATE, problem_state)

    async def evaluate(self, machine: StateMachine) -> None:
        problem_state = machine.require_data(PROBLEM_STATE, ProblemState)
        if not problem_state.execution_results:
            logger.info("No execution results to evaluate")
            return

        latest = problem_state.execution_results[-1]
        evaluation = await self._oracle(
            f"Evaluate this execution result: {latest}. "
            "Has the problem been solved? What progress has been made?"
        )
        machine.set_data(RESULT_EVALUATION_KEY, evaluation)

    async def integrate_knowledge(self, machine: StateMachine) -> None:
        problem_state = machine.require_data(PROBLEM_STATE, ProblemState)
        evaluation = machine.require_data(RESULT_EVALUATION_KEY, str)

        learning = await self._oracle(
            f"Based on this evaluation: {evaluation}, what can be learned about "
            f"solving the problem: {problem_state.problem_description}"
        )
        problem_state.learnings.append(learning)
        machine.set_data(PROBLEM_STATE, problem_state)

    async def reformulate(self, machine: StateMachine) -> None:
        problem_state = machine.require_data(PROBLEM_STATE, ProblemState)

        reformulation = (
            await self._oracle(
                f"Given these learnings: {', '.join(problem_state.learnings)}, "
                "reformulate the problem if necessary: "
                f"{problem_state.problem_description}"
            )
        ).strip()
        if reformulation and reformulation != problem_state.problem_description:
            problem_state.problem_description = reformulation
            machine.set_data(PROBLEM_STATE, problem_state)
            # Restart the cycle with the new formulation
            machine.transition(PROBLEM_ANALYSIS)


def problem_solving_config(oracle: Oracle) -> StateMachineConfig:
    """Build the problem-solving scenario.

    The caller seeds the problem with
    ``machine.set_data(INITIAL_PROBLEM, "...")`` before running.
    """
    actions = ProblemSolvingActions(oracle)
    return StateMachineConfig(
        initial_state=PROBLEM_ANALYSIS,
        possible_states=STATES,
        goal_predicate=problem_solved,
        context_prompt=CONTEXT_PROMPT,
        instructions=[
            Instruction(
                in_state(PROBLEM_ANALYSIS),
                actions.analyze,
                "Analyze the given problem and initialize problem state",
            ),
            Instruction(
                in_state(PLAN_FORMULATION),
                actions.formulate_plan,
                "Formulate a plan to solve the problem",
            ),
            Instruction(
                in_state(PLAN_EXECUTION),
                actions.execute_step,
                "Execute the current step of the plan",
            ),
            Instruction(
                in_state(RESULT_EVALUATION),
                actions.evaluate,
                "Evaluate the results of the last execution step",
            ),
            Instruction(
                in_state(KNOWLEDGE_INTEGRATION),
                actions.integrate_knowledge,
                "Integrate new knowledge from the latest execution and evaluation",
            ),
            Instruction(
                in_state(PROBLEM_REFORMULATION),
                actions.reformulate,
                "Reformulate the problem based on accumulated learnings if necessary",
            ),
        ],
        transition_policy=TablePolicy(TRANSITIONS),
    )
