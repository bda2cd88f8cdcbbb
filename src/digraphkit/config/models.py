"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, digraphkit.toml only contains
overrides. An empty file (or no file) yields the defaults below.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False


class AlgorithmsConfig(BaseModel):
    """[algorithms] section."""

    model_config = {"frozen": True}

    connectivity_method: Literal["dfs", "kosaraju"] = "dfs"
    validate_weights: bool = True


class TelemetryConfig(BaseModel):
    """[telemetry] section."""

    model_config = {"frozen": True}

    enabled: bool = False
