"""
Store configuration and environment parsing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import ConfigurationError


class RollbackPolicy(str, Enum):
    """
    Behaviour of ``rollback`` at the outermost level, where no parent
    snapshot was saved.
    """

    RESET = "reset"
    IGNORE = "ignore"
    ERROR = "error"


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


def parse_rollback_policy(value: str | RollbackPolicy, *, key: str = "outermost_rollback") -> RollbackPolicy:
    if isinstance(value, RollbackPolicy):
        return value
    normalized = value.strip().lower()
    try:
        return RollbackPolicy(normalized)
    except ValueError as exc:
        choices = ", ".join(policy.value for policy in RollbackPolicy)
        raise ConfigurationError(
            f"Invalid rollback policy for '{key}': {value!r} (expected one of {choices})"
        ) from exc


@dataclass
class StoreConfig:
    """
    Normalized configuration for a transactional store.
    """

    outermost_rollback: RollbackPolicy = RollbackPolicy.RESET
    slow_operation_ms: int = 100
    redact_values: bool = True
    source: str | None = None

    def __post_init__(self) -> None:
        self.outermost_rollback = parse_rollback_policy(self.outermost_rollback)
        if self.slow_operation_ms < 0:
            raise ConfigurationError("slow_operation_ms must be non-negative")

    @classmethod
    def from_env(cls, prefix: str = "BLAZEKV_", **kwargs: Any) -> "StoreConfig":
        """
        Build a config from ``<prefix>*`` environment variables.

        Keyword arguments take precedence over the environment.
        """

        rollback_key = f"{prefix}OUTERMOST_ROLLBACK"
        slow_key = f"{prefix}SLOW_OPERATION_MS"
        redact_key = f"{prefix}REDACT_VALUES"

        values: dict[str, Any] = {}
        raw = os.getenv(rollback_key)
        if raw:
            values["outermost_rollback"] = parse_rollback_policy(raw, key=rollback_key)
        raw = os.getenv(slow_key)
        if raw:
            values["slow_operation_ms"] = _parse_int(raw, key=slow_key)
        raw = os.getenv(redact_key)
        if raw:
            values["redact_values"] = _parse_bool(raw, key=redact_key)

        values.update(kwargs)
        values.setdefault("source", "environment")
        return cls(**values)

    def describe(self) -> str:
        label = self.source or "defaults"
        return (
            f"{label} (outermost_rollback={self.outermost_rollback.value}, "
            f"slow_operation_ms={self.slow_operation_ms}, redact_values={self.redact_values})"
        )
