"""State cells - the reactive primitive behind every store.

A StateCell holds the latest value plus a version counter and fans out
changes to subscribers synchronously, on the caller's turn of the event
loop. An EventStream fans out events without remembering them.

Architecture:
    store mutation
           | cell.set(value)
    StateCell (value + version)
           | callback dispatch
    subscribers (views, derived cells)

Usage:
    cell = StateCell(None, name="current_identity")
    sub = cell.subscribe(print)          # replays the current value
    cell.set(identity)                   # prints identity
    cell.set(identity)                   # equal value, suppressed
    sub.unsubscribe()
"""

from __future__ import annotations

from typing import Callable, Generic, List, Optional, TypeVar

from conduit_client.protocols import LoggerProtocol
from conduit_client.utils.logging import get_component_logger

T = TypeVar("T")
U = TypeVar("U")


class Subscription:
    """Handle returned by subscribe(); unsubscribe() is idempotent."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class _Fanout(Generic[T]):
    """Subscriber bookkeeping shared by cells and streams."""

    def __init__(self, name: str, logger: Optional[LoggerProtocol]) -> None:
        self.name = name
        self._callbacks: List[Callable[[T], None]] = []
        self._logger = logger

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def _add(self, callback: Callable[[T], None]) -> Subscription:
        self._callbacks.append(callback)

        def remove() -> None:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

        return Subscription(remove)

    def _deliver(self, callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception as e:
            if self._logger is None:
                self._logger = get_component_logger("StateCell")
            self._logger.error(
                "state_subscriber_error",
                cell=self.name,
                error=str(e),
            )


class StateCell(_Fanout[T]):
    """Latest value + version with distinct-change fan-out.

    Equal consecutive values are suppressed unless ``distinct=False``.
    If a subscriber sets the cell again while a value is being dispatched,
    the remaining subscribers receive only the newer value.
    """

    def __init__(
        self,
        initial: T,
        *,
        name: str = "cell",
        distinct: bool = True,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        super().__init__(name, logger)
        self._value = initial
        self._version = 0
        self._distinct = distinct
        self._source: Optional[Subscription] = None

    @property
    def value(self) -> T:
        return self._value

    @property
    def version(self) -> int:
        return self._version

    def set(self, value: T) -> bool:
        """Publish a new value. Returns False when suppressed as a duplicate."""
        if self._distinct and value == self._value:
            return False
        self._value = value
        self._version += 1
        version = self._version
        for callback in list(self._callbacks):
            if self._version != version:
                # A subscriber published a newer value; it has been delivered
                break
            self._deliver(callback, value)
        return True

    def subscribe(
        self,
        callback: Callable[[T], None],
        *,
        replay: bool = True,
    ) -> Subscription:
        """Register a callback; with ``replay`` it first receives the current value."""
        subscription = self._add(callback)
        if replay:
            self._deliver(callback, self._value)
        return subscription

    def map(self, fn: Callable[[T], U], *, name: Optional[str] = None) -> "StateCell[U]":
        """Derive a distinct cell that tracks ``fn(value)``."""
        derived: StateCell[U] = StateCell(
            fn(self._value),
            name=name or f"{self.name}.map",
            logger=self._logger,
        )
        derived._source = self.subscribe(lambda v: derived.set(fn(v)), replay=False)
        return derived

    def detach(self) -> None:
        """Stop tracking the source cell (derived cells only)."""
        if self._source is not None:
            self._source.unsubscribe()
            self._source = None

    def __repr__(self) -> str:
        return f"StateCell(name={self.name!r}, version={self._version}, value={self._value!r})"


class EventStream(_Fanout[T]):
    """Live-only fan-out: late subscribers receive nothing from the past."""

    def __init__(self, *, name: str = "stream", logger: Optional[LoggerProtocol] = None) -> None:
        super().__init__(name, logger)

    def emit(self, event: T) -> None:
        for callback in list(self._callbacks):
            self._deliver(callback, event)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        return self._add(callback)


__all__ = ["Subscription", "StateCell", "EventStream"]
