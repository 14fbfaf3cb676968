"""Solver configuration.

Defaults can be overridden per process through environment variables:

    POLYAREA_EPSILON               Area tolerance for move legality (1e-12)
    POLYAREA_TERMINAL_CONVENTION   "normal" or "misere" (normal)
    POLYAREA_MAX_TABLE_ENTRIES     LRU cap for the transposition table (unbounded)
    POLYAREA_TIME_LIMIT_SECONDS    Wall-clock budget per solve (unlimited)
    POLYAREA_MAX_NODES             Node budget per solve (unlimited)
    POLYAREA_RECURSION_LIMIT       Interpreter recursion limit during a solve (20000)
"""

from __future__ import annotations

import os
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError
from .models import TerminalConvention

ENV_PREFIX = "POLYAREA_"

DEFAULT_EPSILON = 1e-12
DEFAULT_RECURSION_LIMIT = 20_000


class SolverConfig(BaseModel):
    """Tunables for a single MinimaxSolver."""
    model_config = ConfigDict(frozen=True)

    epsilon: float = Field(DEFAULT_EPSILON, ge=0.0)
    terminal_convention: TerminalConvention = TerminalConvention.NORMAL
    max_table_entries: Optional[int] = Field(None, ge=1)
    time_limit_seconds: Optional[float] = Field(None, gt=0.0)
    max_nodes: Optional[int] = Field(None, ge=1)
    recursion_limit: int = Field(DEFAULT_RECURSION_LIMIT, ge=1000)

    @classmethod
    def from_env(cls, **overrides: Any) -> SolverConfig:
        """Load configuration from POLYAREA_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        parsers: dict[str, Callable[[str], Any]] = {
            "epsilon": float,
            "terminal_convention": lambda raw: raw.strip().lower(),
            "max_table_entries": int,
            "time_limit_seconds": float,
            "max_nodes": int,
            "recursion_limit": int,
        }
        values: dict[str, Any] = {}
        for field_name, parse in parsers.items():
            env_name = ENV_PREFIX + field_name.upper()
            raw = os.environ.get(env_name)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[field_name] = parse(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"Cannot parse {env_name}",
                    value=raw,
                ) from e
        values.update(overrides)
        return cls.create(**values)

    @classmethod
    def create(cls, **values: Any) -> SolverConfig:
        """Build a config, raising ConfigurationError on invalid values."""
        try:
            return cls(**values)
        except ValidationError as e:
            errors = e.errors()
            field_name = ".".join(str(p) for p in errors[0]["loc"]) if errors else ""
            detail = errors[0]["msg"] if errors else str(e)
            raise ConfigurationError(
                f"Invalid solver configuration: {detail}",
                field=field_name,
            ) from e
