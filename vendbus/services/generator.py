"""Random event generator for the vending-machine demo."""

from __future__ import annotations

import random

from vendbus.domain.events import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    MachineEvent,
    MachineRefillEvent,
    MachineSaleEvent,
    StockCheckEvent,
)

SALE_PROBABILITY = 0.5
SALE_QUANTITIES = (1, 2)
REFILL_QUANTITIES = (3, 5)


def random_machine_id(rng: random.Random, machine_ids: list[str]) -> str:
    return rng.choice(machine_ids)


def generate_batch(
    rng: random.Random,
    machine_ids: list[str],
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> list[MachineEvent]:
    """Return a sale or refill for one random machine, followed by its stock check.

    The check reports on the quantity moved by the sale or refill.
    """
    machine_id = random_machine_id(rng, machine_ids)

    if rng.random() < SALE_PROBABILITY:
        quantity = rng.choice(SALE_QUANTITIES)
        movement: MachineEvent = MachineSaleEvent(sold=quantity, machine_id=machine_id)
    else:
        quantity = rng.choice(REFILL_QUANTITIES)
        movement = MachineRefillEvent(refill=quantity, machine_id=machine_id)

    check = StockCheckEvent.for_quantity(quantity, machine_id, low_stock_threshold)
    return [movement, check]


def generate_batches(
    count: int,
    rng: random.Random,
    machine_ids: list[str],
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> list[list[MachineEvent]]:
    return [
        generate_batch(rng, machine_ids, low_stock_threshold) for _ in range(count)
    ]
