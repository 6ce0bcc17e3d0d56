"""Root test fixtures shared across unit and integration tests."""

import logging
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from mst.machine import Instruction, StateMachine, StateMachineConfig, visited
from mst.policy import OraclePolicy, TablePolicy

# ============================================================================
# Machine Fixtures
# ============================================================================

ABC = ["A", "B", "C"]


@pytest.fixture
def make_config() -> Callable[..., StateMachineConfig]:
    """Factory for configs over the A/B/C catalog with an unreachable goal."""

    def _create(**overrides: Any) -> StateMachineConfig:
        options: dict[str, Any] = {
            "initial_state": "A",
            "possible_states": ABC,
            "goal_predicate": lambda visited_states, machine: False,
            "context_prompt": "You are testing a state machine.",
        }
        options.update(overrides)
        return StateMachineConfig(**options)

    return _create


@pytest.fixture
def make_machine(
    make_config: Callable[..., StateMachineConfig],
) -> Callable[..., StateMachine]:
    """Factory for machines built from make_config."""

    def _create(**overrides: Any) -> StateMachine:
        return StateMachine(make_config(**overrides))

    return _create


@pytest.fixture
def machine(make_machine: Callable[..., StateMachine]) -> StateMachine:
    """Machine in state A over [A, B, C] with no instructions."""
    return make_machine()


@pytest.fixture
def recording_instruction() -> Callable[..., Instruction]:
    """Factory for instructions that append their label to a shared list."""

    def _create(
        label: str,
        calls: list[str],
        *,
        state: str | None = None,
    ) -> Instruction:
        def action(machine: StateMachine) -> None:
            calls.append(label)

        return Instruction(
            condition=lambda m: state is None or m.state == state,
            action=action,
            description=label,
        )

    return _create


# ============================================================================
# Oracle Mocks
# ============================================================================


@pytest.fixture
def mock_oracle() -> AsyncMock:
    """Oracle returning "B" unless reconfigured."""
    return AsyncMock(return_value="B")


@pytest.fixture
def echo_oracle() -> AsyncMock:
    """Oracle that always proposes the machine's current state."""

    async def _echo(prompt: str) -> str:
        line = next(
            line for line in prompt.splitlines() if line.startswith("Current state:")
        )
        return line.removeprefix("Current state:").strip()

    return AsyncMock(side_effect=_echo)


@pytest.fixture
def oracle_policy(mock_oracle: AsyncMock) -> OraclePolicy:
    return OraclePolicy(mock_oracle)


@pytest.fixture
def table_policy() -> TablePolicy:
    """S1 -> S2 -> S3 with no entry for S3."""
    return TablePolicy({"S1": "S2", "S2": "S3"})


@pytest.fixture
def table_machine(table_policy: TablePolicy) -> StateMachine:
    return StateMachine(
        StateMachineConfig(
            initial_state="S1",
            possible_states=["S1", "S2", "S3"],
            goal_predicate=visited("never"),
            transition_policy=table_policy,
        )
    )


# ============================================================================
# Claude Agent SDK Mocks
# ============================================================================


@pytest.fixture
def mock_assistant_message() -> Callable[..., MagicMock]:
    """Factory for creating mock AssistantMessage instances."""
    from claude_agent_sdk.types import AssistantMessage, TextBlock

    def _create(*, text: str = "Assistant response") -> MagicMock:
        mock = MagicMock(spec=AssistantMessage)
        text_block = MagicMock(spec=TextBlock)
        text_block.text = text
        mock.content = [text_block]
        return mock

    return _create


# ============================================================================
# Logging Cleanup (autouse)
# ============================================================================


@pytest.fixture(autouse=True)
def cleanup_logging_handlers() -> Iterator[None]:
    """Close handlers added by setup_logging() so tests don't leak files."""
    yield
    logger = logging.getLogger("mst")
    for handler in logger.handlers[:]:
        handler.close()
    logger.handlers.clear()
