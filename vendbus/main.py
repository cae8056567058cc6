"""Command-line demo: publish random machine events, then replay them by kind."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable

import click

from vendbus.config import SimulationSettings
from vendbus.domain.bus import PubSubService
from vendbus.domain.events import EventKind
from vendbus.domain.handlers import (
    MachineRefillSubscriber,
    MachineSaleSubscriber,
    StockWarningSubscriber,
)
from vendbus.logging_config import setup_logging
from vendbus.repos.memory import MachineRepository, create_machine_repository
from vendbus.services.generator import generate_batches

logger = logging.getLogger(__name__)


@dataclass
class DemoResult:
    machines: MachineRepository
    bus: PubSubService


def build_machines(settings: SimulationSettings) -> MachineRepository:
    return create_machine_repository(settings.machine_ids, settings.initial_stock)


def run(
    settings: SimulationSettings, echo: Callable[[str], None] = click.echo
) -> DemoResult:
    """Publish ``settings.batches`` random batches and run the scripted sequence.

    Subscribing replays the backlog of a kind; unsubscribing purges it. The
    order below therefore decides which events ever reach a handler.
    """
    machines = build_machines(settings)
    sale_subscriber = MachineSaleSubscriber(machines, echo)
    refill_subscriber = MachineRefillSubscriber(machines, echo)
    stock_subscriber = StockWarningSubscriber(machines, echo)

    bus = PubSubService()
    rng = random.Random(settings.seed)
    batches = generate_batches(
        settings.batches, rng, settings.machine_ids, settings.low_stock_threshold
    )
    for batch in batches:
        bus.publish(batch)
    logger.info("Published %d batch(es), %d event(s)", len(batches), len(bus))

    bus.subscribe(EventKind.SALE, sale_subscriber)
    bus.subscribe(EventKind.CHECK, stock_subscriber)
    bus.unsubscribe(EventKind.SALE)
    bus.subscribe(EventKind.REFILL, refill_subscriber)
    bus.unsubscribe(EventKind.REFILL)
    bus.unsubscribe(EventKind.CHECK)

    return DemoResult(machines=machines, bus=bus)


@click.command()
@click.option(
    "--batches",
    type=click.IntRange(min=0),
    default=None,
    help="Number of event batches to publish",
)
@click.option("--seed", type=int, default=None, help="Random seed for reproducible runs")
@click.option("--log-level", default=None, help="Log level (default: LOG_LEVEL or WARNING)")
def main(batches: int | None, seed: int | None, log_level: str | None) -> None:
    """Vending-machine pub-sub demo."""
    overrides: dict = {}
    if batches is not None:
        overrides["batches"] = batches
    if seed is not None:
        overrides["seed"] = seed
    if log_level is not None:
        overrides["log_level"] = log_level

    settings = SimulationSettings(**overrides)
    setup_logging(settings.log_level)

    result = run(settings)

    click.echo("Final stock:")
    for machine in result.machines.list_all():
        click.echo(f"  machine {machine.id}: {machine.stock_level}")


if __name__ == "__main__":
    main()
