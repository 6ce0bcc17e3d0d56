"""Tests for the static successor-map policy."""

import pytest

from mst.core.errors import ConfigurationError, NoSuccessorDefinedError
from mst.machine import StateMachine
from mst.policy import TablePolicy


class TestTablePolicy:
    """Tests for table lookups."""

    @pytest.mark.asyncio
    async def test_returns_mapped_successor(self, table_machine: StateMachine) -> None:
        decision = await table_machine.transition_policy.next_state(table_machine)

        assert decision.state == "S2"
        assert decision.fell_back is False

    @pytest.mark.asyncio
    async def test_missing_entry_raises(
        self, table_machine: StateMachine, table_policy: TablePolicy
    ) -> None:
        table_machine.transition("S3")

        with pytest.raises(NoSuccessorDefinedError) as exc_info:
            await table_policy.next_state(table_machine)

        assert exc_info.value.state == "S3"

    def test_has_successor(self, table_policy: TablePolicy) -> None:
        assert table_policy.has_successor("S1") is True
        assert table_policy.has_successor("S3") is False

    def test_validate_accepts_known_states(self, table_policy: TablePolicy) -> None:
        table_policy.validate(["S1", "S2", "S3"])

    def test_validate_rejects_unknown_successor(
        self, table_policy: TablePolicy
    ) -> None:
        with pytest.raises(ConfigurationError, match="S3"):
            table_policy.validate(["S1", "S2"])

    def test_successors_is_a_copy(self, table_policy: TablePolicy) -> None:
        table_policy.successors["S3"] = "S1"

        assert table_policy.has_successor("S3") is False
