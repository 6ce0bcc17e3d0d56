"""Tests for the oracle-backed transition policy."""

from unittest.mock import AsyncMock

import pytest

from mst.core.errors import OracleError
from mst.machine import Instruction, StateMachine, in_state
from mst.policy import (
    OraclePolicy,
    build_transition_prompt,
    is_acceptable,
    parse_candidate,
)


class TestParseCandidate:
    """Tests for extracting the candidate from free text."""

    def test_trims_whitespace(self) -> None:
        assert parse_candidate("  B \n") == "B"

    def test_takes_first_line(self) -> None:
        assert parse_candidate("B\nBecause B is next.") == "B"

    def test_skips_leading_blank_lines(self) -> None:
        assert parse_candidate("\n\n  C\nmore") == "C"

    def test_empty_response(self) -> None:
        assert parse_candidate("   \n  ") == ""


class TestIsAcceptable:
    """Tests for candidate validation against the catalog."""

    def test_other_catalog_state(self, machine: StateMachine) -> None:
        assert is_acceptable("B", machine) is True

    def test_current_state_rejected(self, machine: StateMachine) -> None:
        assert is_acceptable("A", machine) is False

    @pytest.mark.parametrize("candidate", ["c", '"C"', "C.", "**C**", "Z", ""])
    def test_near_misses_rejected(self, machine: StateMachine, candidate: str) -> None:
        assert is_acceptable(candidate, machine) is False


class TestBuildTransitionPrompt:
    """Tests for prompt rendering."""

    def test_contains_all_sections(self, make_machine) -> None:
        machine = make_machine(
            context_prompt="You guide a test.",
            instructions=[
                Instruction(in_state("A"), lambda m: None, "Do the A thing"),
                Instruction(in_state("B"), lambda m: None, "Do the B thing"),
            ],
        )
        machine.set_data("ticket", 42)
        machine.set_data("customer", "Ada")

        prompt = build_transition_prompt(machine)

        assert prompt.startswith("You guide a test.\n")
        assert "Current state: A\n" in prompt
        assert "Visited states: A\n" in prompt
        assert "Possible states: A, B, C\n" in prompt
        assert "Active instructions:\nDo the A thing\n" in prompt
        assert "Do the B thing" not in prompt
        assert "Additional context:\nticket: 42\ncustomer: Ada\n" in prompt
        assert prompt.endswith("Reply with just the chosen state.")

    def test_visited_states_joined_in_visit_order(self, machine: StateMachine) -> None:
        machine.transition("C")
        machine.transition("B")

        assert "Visited states: A, C, B\n" in build_transition_prompt(machine)


class TestOraclePolicy:
    """Tests for candidate validation and fallback."""

    @pytest.mark.asyncio
    async def test_valid_candidate_is_used(self, machine: StateMachine) -> None:
        policy = OraclePolicy(AsyncMock(return_value="B"))

        decision = await policy.next_state(machine)

        assert decision.state == "B"
        assert decision.fell_back is False

    @pytest.mark.asyncio
    async def test_candidate_equal_to_current_falls_back(
        self, machine: StateMachine
    ) -> None:
        policy = OraclePolicy(AsyncMock(return_value="A"))

        decision = await policy.next_state(machine)

        assert decision.state == "B"
        assert decision.candidate == "A"
        assert decision.fell_back is True

    @pytest.mark.asyncio
    async def test_unknown_candidate_falls_back(self, machine: StateMachine) -> None:
        policy = OraclePolicy(AsyncMock(return_value="Z"))

        decision = await policy.next_state(machine)

        assert decision.state == "B"
        assert decision.fell_back is True

    @pytest.mark.asyncio
    async def test_wrong_case_candidate_falls_back(
        self, machine: StateMachine
    ) -> None:
        policy = OraclePolicy(AsyncMock(return_value="c"))

        decision = await policy.next_state(machine)

        assert decision.state == "B"
        assert decision.candidate == "c"
        assert decision.fell_back is True

    @pytest.mark.asyncio
    async def test_quoted_candidate_falls_back(self, machine: StateMachine) -> None:
        policy = OraclePolicy(AsyncMock(return_value='"C".'))

        decision = await policy.next_state(machine)

        assert decision.state == "B"
        assert decision.fell_back is True

    @pytest.mark.asyncio
    async def test_empty_response_falls_back(self, machine: StateMachine) -> None:
        policy = OraclePolicy(AsyncMock(return_value="  \n "))

        decision = await policy.next_state(machine)

        assert decision.state == "B"
        assert decision.candidate == ""

    @pytest.mark.asyncio
    async def test_wraps_when_everything_visited(self, machine: StateMachine) -> None:
        machine.transition("B")
        machine.transition("C")
        policy = OraclePolicy(AsyncMock(return_value="C"))

        decision = await policy.next_state(machine)

        assert decision.state == "A"
        assert decision.wrapped is True

    @pytest.mark.asyncio
    async def test_multiline_answer_uses_first_line(
        self, machine: StateMachine
    ) -> None:
        policy = OraclePolicy(AsyncMock(return_value="C\nC is the best next step."))

        decision = await policy.next_state(machine)

        assert decision.state == "C"

    @pytest.mark.asyncio
    async def test_sends_rendered_prompt(self, machine: StateMachine) -> None:
        oracle = AsyncMock(return_value="B")

        await OraclePolicy(oracle).next_state(machine)

        oracle.assert_awaited_once_with(build_transition_prompt(machine))

    @pytest.mark.asyncio
    async def test_oracle_error_propagates(self, machine: StateMachine) -> None:
        policy = OraclePolicy(AsyncMock(side_effect=OracleError("401")))

        with pytest.raises(OracleError):
            await policy.next_state(machine)

    def test_always_has_successor(self, oracle_policy: OraclePolicy) -> None:
        assert oracle_policy.has_successor("anything") is True
