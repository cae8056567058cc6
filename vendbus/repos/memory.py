"""In-memory repository for vending machines."""

from __future__ import annotations

from vendbus.domain.models import Machine


class MachineRepository:
    """Dict-backed store for Machine instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, Machine] = {}

    def add(self, machine: Machine) -> None:
        self._store[machine.id] = machine

    def get(self, machine_id: str) -> Machine | None:
        return self._store.get(machine_id)

    def list_all(self) -> list[Machine]:
        return list(self._store.values())

    def __len__(self) -> int:
        return len(self._store)


def create_machine_repository(
    machine_ids: list[str], initial_stock: int
) -> MachineRepository:
    """Return a MachineRepository with one machine per id at *initial_stock*."""
    repo = MachineRepository()
    for machine_id in machine_ids:
        repo.add(Machine(id=machine_id, stock_level=initial_stock))
    return repo
