"""Simulation settings.

Read from ``VENDBUS_``-prefixed environment variables; list fields take JSON,
e.g. ``VENDBUS_MACHINE_IDS='["A", "B"]'``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vendbus.domain.events import DEFAULT_LOW_STOCK_THRESHOLD
from vendbus.domain.models import DEFAULT_STOCK_LEVEL


class SimulationSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VENDBUS_")

    machine_ids: list[str] = Field(
        default_factory=lambda: ["001", "002", "003"], min_length=1
    )
    initial_stock: int = DEFAULT_STOCK_LEVEL
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    batches: int = Field(default=5, ge=0)
    seed: int | None = None
    log_level: str | None = None
