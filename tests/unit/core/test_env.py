"""Tests for environment validation."""

from pathlib import Path

import pytest

from mst.core.enums import Tier
from mst.core.env import (
    AUTH_ENV_VARS,
    default_tier,
    has_cli_login,
    validate_required_env,
)
from mst.core.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """No auth variables and no tier override."""
    for name in (*AUTH_ENV_VARS, "MST_MODEL_TIER"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestValidateRequiredEnv:
    """Tests for startup validation."""

    @pytest.mark.parametrize("name", AUTH_ENV_VARS)
    def test_passes_with_any_auth_variable(
        self, clean_env: pytest.MonkeyPatch, tmp_path: Path, name: str
    ) -> None:
        clean_env.setenv(name, "1")

        validate_required_env(home=tmp_path)

    def test_passes_with_cli_login(
        self, clean_env: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        (tmp_path / ".claude").mkdir()
        (tmp_path / ".claude" / ".credentials.json").write_text("{}")

        validate_required_env(home=tmp_path)

    def test_exits_without_credentials(
        self,
        clean_env: pytest.MonkeyPatch,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            validate_required_env(home=tmp_path)

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "ANTHROPIC_API_KEY" in err
        assert "claude login" in err

    def test_exits_on_invalid_tier(
        self,
        clean_env: pytest.MonkeyPatch,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-test")
        clean_env.setenv("MST_MODEL_TIER", "ultra")

        with pytest.raises(SystemExit):
            validate_required_env(home=tmp_path)

        assert "MST_MODEL_TIER='ultra'" in capsys.readouterr().err


class TestDefaultTier:
    def test_med_when_unset(self, clean_env: pytest.MonkeyPatch) -> None:
        assert default_tier() == Tier.MED

    def test_reads_variable(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("MST_MODEL_TIER", " HIGH ")

        assert default_tier() == Tier.HIGH

    def test_rejects_unknown_tier(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("MST_MODEL_TIER", "ultra")

        with pytest.raises(ConfigurationError, match="low, med, high"):
            default_tier()


class TestHasCliLogin:
    def test_false_without_credentials(self, tmp_path: Path) -> None:
        assert has_cli_login(tmp_path) is False
