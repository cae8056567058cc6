"""Domain events published by vending machines."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LOW_STOCK_THRESHOLD = 3


class EventKind(StrEnum):
    SALE = "sale"
    REFILL = "refill"
    CHECK = "check"


class StockStatus(StrEnum):
    LOW = "low"
    OK = "ok"


class MachineEvent(BaseModel):
    """Base for every event routed through the bus.

    Events are frozen once constructed.
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    machine_id: str = Field(min_length=1)


class MachineSaleEvent(MachineEvent):
    """Fired when units are sold from a machine."""

    kind: Literal[EventKind.SALE] = EventKind.SALE
    sold: int = Field(ge=0)


class MachineRefillEvent(MachineEvent):
    """Fired when a machine is restocked."""

    kind: Literal[EventKind.REFILL] = EventKind.REFILL
    refill: int = Field(ge=0)


class StockCheckEvent(MachineEvent):
    """Fired after a sale or refill to report whether stock is low or OK."""

    kind: Literal[EventKind.CHECK] = EventKind.CHECK
    quantity: int = Field(ge=0)
    status: StockStatus

    @classmethod
    def for_quantity(
        cls,
        quantity: int,
        machine_id: str,
        threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> StockCheckEvent:
        status = StockStatus.LOW if quantity < threshold else StockStatus.OK
        return cls(quantity=quantity, machine_id=machine_id, status=status)
