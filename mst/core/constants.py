"""Centralized configuration constants."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Execution loop settings."""

    max_iterations: int = 50
    step_delay: float = 0.0


@dataclass(frozen=True)
class OracleConfig:
    """Oracle request settings."""

    max_retries: int = 3
    base_retry_delay: float = 1.0


@dataclass(frozen=True)
class RetentionConfig:
    """Retention periods."""

    logs_days: int = 7


# Singleton configs
ENGINE = EngineConfig()
ORACLE = OracleConfig()
RETENTION = RetentionConfig()
