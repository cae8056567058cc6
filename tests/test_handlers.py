"""Tests for the machine subscribers, alone and through the bus."""

from __future__ import annotations

import logging

import pytest

from vendbus.domain.bus import PubSubService
from vendbus.domain.events import (
    MachineRefillEvent,
    MachineSaleEvent,
    StockCheckEvent,
    StockStatus,
)
from vendbus.domain.handlers import (
    MachineRefillSubscriber,
    MachineSaleSubscriber,
    StockWarningSubscriber,
)
from vendbus.repos.memory import create_machine_repository


@pytest.fixture()
def machines():
    return create_machine_repository(["001", "002", "003"], initial_stock=10)


@pytest.fixture()
def lines() -> list[str]:
    return []


# ---------------------------------------------------------------------------
# Sale / refill
# ---------------------------------------------------------------------------


def test_sale_decrements_the_event_machine(machines, lines):
    subscriber = MachineSaleSubscriber(machines, lines.append)

    subscriber.handle(MachineSaleEvent(sold=2, machine_id="001"))

    assert machines.get("001").stock_level == 8
    assert machines.get("002").stock_level == 10
    assert machines.get("003").stock_level == 10
    assert lines == ["Sold 2 at machine 001, stock now 8"]


def test_refill_increments_the_event_machine(machines, lines):
    subscriber = MachineRefillSubscriber(machines, lines.append)

    subscriber.handle(MachineRefillEvent(refill=5, machine_id="002"))

    assert machines.get("002").stock_level == 15
    assert machines.get("001").stock_level == 10
    assert lines == ["Refilled 5 at machine 002, stock now 15"]


def test_stock_may_go_negative(machines, lines):
    subscriber = MachineSaleSubscriber(machines, lines.append)

    for _ in range(6):
        subscriber.handle(MachineSaleEvent(sold=2, machine_id="003"))

    assert machines.get("003").stock_level == -2


def test_unknown_machine_is_skipped(machines, lines, caplog):
    subscriber = MachineSaleSubscriber(machines, lines.append)

    with caplog.at_level(logging.WARNING):
        subscriber.handle(MachineSaleEvent(sold=2, machine_id="999"))

    assert lines == []
    assert [m.stock_level for m in machines.list_all()] == [10, 10, 10]
    assert "999" in caplog.text


def test_sale_subscriber_through_bus(machines, lines):
    bus = PubSubService()
    bus.publish(
        [
            MachineSaleEvent(sold=1, machine_id="001"),
            MachineRefillEvent(refill=3, machine_id="001"),
            MachineSaleEvent(sold=2, machine_id="001"),
        ]
    )

    bus.subscribe("sale", MachineSaleSubscriber(machines, lines.append))

    assert machines.get("001").stock_level == 7
    assert len(lines) == 2


# ---------------------------------------------------------------------------
# Stock warning latches
# ---------------------------------------------------------------------------


def _low(machine_id: str = "001") -> StockCheckEvent:
    return StockCheckEvent(quantity=1, machine_id=machine_id, status=StockStatus.LOW)


def _ok(machine_id: str = "001") -> StockCheckEvent:
    return StockCheckEvent(quantity=5, machine_id=machine_id, status=StockStatus.OK)


def test_low_then_ok_fires_each_latch_once(machines, lines):
    subscriber = StockWarningSubscriber(machines, lines.append)

    for _ in range(3):
        subscriber.handle(_low())
    subscriber.handle(_ok())

    assert lines == ["Stock of machine 001 is Low!", "Stock of machine 001 is OK!"]
    assert subscriber.warning_fired is True
    assert subscriber.ok_fired is True


def test_latches_never_reset(machines, lines):
    subscriber = StockWarningSubscriber(machines, lines.append)

    for event in (_low(), _ok(), _low(), _ok(), _low("002"), _ok("003")):
        subscriber.handle(event)

    assert len(lines) == 2


def test_latches_are_per_instance(machines, lines):
    first = StockWarningSubscriber(machines, lines.append)
    second = StockWarningSubscriber(machines, lines.append)

    first.handle(_low())
    second.handle(_low())

    assert lines == ["Stock of machine 001 is Low!"] * 2


def test_warning_subscriber_does_not_touch_stock(machines, lines):
    subscriber = StockWarningSubscriber(machines, lines.append)

    subscriber.handle(_low())

    assert [m.stock_level for m in machines.list_all()] == [10, 10, 10]


def test_warning_subscriber_replay_twice_stays_latched(machines, lines):
    bus = PubSubService()
    bus.publish([_low(), _low(), _ok()])
    subscriber = StockWarningSubscriber(machines, lines.append)

    bus.subscribe("check", subscriber)
    bus.subscribe("check", subscriber)

    assert lines == ["Stock of machine 001 is Low!", "Stock of machine 001 is OK!"]
