"""Subscribers that apply machine events to stock levels."""

from __future__ import annotations

import logging
from typing import Callable

import click

from vendbus.domain.events import (
    MachineRefillEvent,
    MachineSaleEvent,
    StockCheckEvent,
    StockStatus,
)
from vendbus.domain.models import Machine
from vendbus.repos.memory import MachineRepository

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


class _MachineSubscriber:
    """Shared wiring: the machine repository and the output sink."""

    def __init__(self, machines: MachineRepository, echo: Echo = click.echo) -> None:
        self.machines = machines
        self.echo = echo

    def _lookup(self, machine_id: str) -> Machine | None:
        machine = self.machines.get(machine_id)
        if machine is None:
            logger.warning(
                "%s: no machine %r, event skipped", type(self).__name__, machine_id
            )
        return machine


class MachineSaleSubscriber(_MachineSubscriber):
    def handle(self, event: MachineSaleEvent) -> None:
        machine = self._lookup(event.machine_id)
        if machine is None:
            return

        machine.stock_level -= event.sold
        self.echo(
            f"Sold {event.sold} at machine {machine.id}, stock now {machine.stock_level}"
        )


class MachineRefillSubscriber(_MachineSubscriber):
    def handle(self, event: MachineRefillEvent) -> None:
        machine = self._lookup(event.machine_id)
        if machine is None:
            return

        machine.stock_level += event.refill
        self.echo(
            f"Refilled {event.refill} at machine {machine.id}, "
            f"stock now {machine.stock_level}"
        )


class StockWarningSubscriber(_MachineSubscriber):
    """Announces low and OK stock at most once each.

    The two latches belong to the subscriber instance, not to a machine:
    after the first low-stock notice no further low-stock event is
    reported, whichever machine it comes from.
    """

    def __init__(self, machines: MachineRepository, echo: Echo = click.echo) -> None:
        super().__init__(machines, echo)
        self.warning_fired = False
        self.ok_fired = False

    def handle(self, event: StockCheckEvent) -> None:
        if event.status == StockStatus.LOW and not self.warning_fired:
            self.echo(f"Stock of machine {event.machine_id} is Low!")
            self.warning_fired = True
        elif event.status == StockStatus.OK and not self.ok_fired:
            self.echo(f"Stock of machine {event.machine_id} is OK!")
            self.ok_fired = True
