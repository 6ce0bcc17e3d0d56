"""Tests for StateMachineConfig validation."""

import pytest

from mst.core.errors import ConfigurationError
from mst.machine import StateMachineConfig, visited
from mst.policy import OraclePolicy, TablePolicy


class TestStateMachineConfig:
    """Tests for configuration validation."""

    def test_normalizes_sequences_to_tuples(self, make_config) -> None:
        config = make_config(possible_states=["A", "B", "C"], instructions=[])

        assert config.possible_states == ("A", "B", "C")
        assert config.instructions == ()

    def test_rejects_empty_catalog(self) -> None:
        with pytest.raises(ConfigurationError, match="must not be empty"):
            StateMachineConfig(
                initial_state="A", possible_states=[], goal_predicate=visited("A")
            )

    def test_rejects_initial_state_outside_catalog(self, make_config) -> None:
        with pytest.raises(ConfigurationError, match="not in possible_states"):
            make_config(initial_state="Z")

    def test_rejects_duplicate_states(self, make_config) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate"):
            make_config(possible_states=["A", "B", "A"])

    def test_rejects_table_with_unknown_states(self, make_config) -> None:
        with pytest.raises(ConfigurationError, match="unknown states"):
            make_config(transition_policy=TablePolicy({"A": "Z"}))

    def test_accepts_oracle_policy(self, make_config, mock_oracle) -> None:
        config = make_config(transition_policy=OraclePolicy(mock_oracle))

        assert config.transition_policy is not None
        assert config.transition_policy.name == "oracle"
