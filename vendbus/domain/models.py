"""Domain models for the vending-machine simulation."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_STOCK_LEVEL = 10


class Machine(BaseModel):
    id: str = Field(min_length=1)
    stock_level: int = DEFAULT_STOCK_LEVEL
