"""Replay-on-subscribe in-process event bus."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Protocol

from vendbus.domain.events import MachineEvent

logger = logging.getLogger(__name__)


class Subscriber(Protocol):
    def handle(self, event: MachineEvent) -> None: ...


class DispatchError(Exception):
    """A subscriber raised while an event was being delivered to it."""

    def __init__(self, kind: str, machine_id: str, cause: BaseException) -> None:
        super().__init__(
            f"subscriber failed on {kind!r} event from machine {machine_id}: {cause}"
        )
        self.kind = kind
        self.machine_id = machine_id
        self.cause = cause


class PubSubService:
    """Buffers published events and replays them to subscribers on demand.

    This is not a conventional observer: ``subscribe`` registers nothing.
    It walks the buffer in publish order and hands every event of the
    requested kind to the subscriber right away. Subscribing twice delivers
    the same backlog twice. ``unsubscribe`` purges the backlog of a kind so
    later subscribers never see it.

    Handlers run synchronously on the caller's thread. A handler exception
    stops the replay and propagates to the caller, wrapped in
    :class:`DispatchError` when ``wrap_errors`` is set.
    """

    def __init__(self, wrap_errors: bool = False) -> None:
        self._buffer: list[MachineEvent] = []
        self._lock = threading.RLock()
        self.wrap_errors = wrap_errors

    def publish(self, events: Iterable[MachineEvent]) -> None:
        with self._lock:
            before = len(self._buffer)
            self._buffer.extend(events)
            logger.debug(
                "Published %d event(s), buffer size %d",
                len(self._buffer) - before,
                len(self._buffer),
            )

    def subscribe(self, kind: str, subscriber: Subscriber) -> None:
        with self._lock:
            # Events published by a handler mid-replay wait for the next call.
            backlog = [e for e in self._buffer if e.kind == kind]
            logger.debug(
                "Replaying %d %r event(s) to %s",
                len(backlog),
                kind,
                type(subscriber).__name__,
            )
            for event in backlog:
                if not self.wrap_errors:
                    subscriber.handle(event)
                    continue
                try:
                    subscriber.handle(event)
                except Exception as exc:
                    raise DispatchError(event.kind, event.machine_id, exc) from exc

    def unsubscribe(self, kind: str) -> None:
        with self._lock:
            before = len(self._buffer)
            self._buffer = [e for e in self._buffer if e.kind != kind]
            logger.debug(
                "Purged %d %r event(s), buffer size %d",
                before - len(self._buffer),
                kind,
                len(self._buffer),
            )

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def pending(self, kind: str | None = None) -> list[MachineEvent]:
        """Snapshot of the buffer, optionally filtered by kind."""
        with self._lock:
            if kind is None:
                return list(self._buffer)
            return [e for e in self._buffer if e.kind == kind]

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
