"""In-memory key-value stores, events and the execution context."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


class KVStore:
    """A byte-keyed store iterated in ascending key order."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        if not key:
            raise ValueError("key is nil")
        if value is None:
            raise ValueError("value is nil")
        self._data[bytes(key)] = bytes(value)

    def delete(self, key: bytes) -> None:
        self._data.pop(bytes(key), None)

    def has(self, key: bytes) -> bool:
        return bytes(key) in self._data

    def iterate_prefix(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        """Yield (key, value) pairs whose key starts with ``prefix``, in key order."""
        prefix = bytes(prefix)
        entries = sorted(
            (key, value) for key, value in self._data.items() if key.startswith(prefix)
        )
        return iter(entries)

    def __len__(self) -> int:
        return len(self._data)


@dataclass(frozen=True)
class Event:
    """A typed event with ordered key/value attributes."""

    type: str
    attributes: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "attributes", tuple((str(k), str(v)) for k, v in self.attributes)
        )


class EventManager:
    """Collects events emitted while handling a message or block."""

    def __init__(self) -> None:
        self._events: list[Event] = []

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    def emit(self, event: Event) -> None:
        self._events.append(event)

    def emit_events(self, events: Iterable[Event]) -> None:
        self._events.extend(events)


def _epoch() -> datetime:
    return datetime.fromtimestamp(0, timezone.utc)


@dataclass
class Context:
    """Block and transaction context; copies made with ``with_*`` share stores."""

    chain_id: str = ""
    block_height: int = 0
    block_time: datetime = field(default_factory=_epoch)
    stores: dict[str, KVStore] = field(default_factory=dict)
    event_manager: EventManager = field(default_factory=EventManager)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("irishub"))

    def kv_store(self, key: str) -> KVStore:
        return self.stores.setdefault(key, KVStore())

    def with_event_manager(self, manager: EventManager) -> Context:
        return replace(self, event_manager=manager)

    def with_chain_id(self, chain_id: str) -> Context:
        return replace(self, chain_id=chain_id)