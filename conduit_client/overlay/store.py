"""Optimistic overlay - server snapshot merged with local patches.

An Overlay tracks one focused entity (an article, a profile, the comments
of an article) identified by its focus key:

    fetch(key) once ──> remote snapshot ──┐
                                          ├──> value (latest merged)
    apply_patch(patch) ── live patches ───┘

Patches fold onto the latest merged value, so a favorite followed by an
unfavorite composes without a refetch. A failed fetch is reported to
failure subscribers once; patches arriving afterwards are dropped.

An OverlayHost owns the overlay for the current focus and replaces it
when the focus key changes, cancelling the old fetch.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, Protocol, TypeVar, runtime_checkable

from conduit_client.errors import ConduitClientError
from conduit_client.overlay.patches import OverlayPatch
from conduit_client.protocols import LoggerProtocol
from conduit_client.state import EventStream, StateCell, Subscription
from conduit_client.utils.logging import get_component_logger
from conduit_client.utils.tasks import wait_settled

E = TypeVar("E")

Fetch = Callable[[str], Awaitable[E]]
Fold = Callable[[E, OverlayPatch], E]
FailureCallback = Callable[[ConduitClientError], None]


@runtime_checkable
class PatchTarget(Protocol):
    """Anything a successful mutation can patch in place."""

    def apply_patch(self, patch: OverlayPatch) -> bool:
        ...


class OverlayState(str, Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


class Overlay(Generic[E]):
    """Merged view of one entity for one focus key."""

    def __init__(
        self,
        key: str,
        fetch: Fetch,
        fold: Fold,
        *,
        name: str = "overlay",
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self.key = key
        self.name = name
        self._fetch = fetch
        self._fold = fold
        self._logger = get_component_logger("Overlay", logger).bind(overlay=name, key=key)

        self._state = OverlayState.PENDING
        self._remote: Optional[E] = None
        self._failure: Optional[ConduitClientError] = None
        self._task: Optional[asyncio.Task] = None

        self._value: StateCell[Optional[E]] = StateCell(None, name=f"{name}.value", logger=self._logger)
        self.patches: EventStream[OverlayPatch] = EventStream(name=f"{name}.patches", logger=self._logger)
        self._failures: EventStream[ConduitClientError] = EventStream(
            name=f"{name}.failures", logger=self._logger
        )

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def value(self) -> Optional[E]:
        """Latest merged value (None until the fetch completes)."""
        return self._value.value

    @property
    def remote(self) -> Optional[E]:
        """The cached server snapshot, without local patches."""
        return self._remote

    @property
    def failure(self) -> Optional[ConduitClientError]:
        return self._failure

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def load(self) -> asyncio.Task:
        """Start the remote fetch; later calls return the same task."""
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._load())
        return self._task

    async def _load(self) -> None:
        try:
            entity = await self._fetch(self.key)
        except asyncio.CancelledError:
            self._logger.debug("overlay_fetch_cancelled")
            raise
        except ConduitClientError as e:
            if self._state is OverlayState.CLOSED:
                return
            self._fail(e)
            return

        if self._state is OverlayState.CLOSED:
            return
        self._remote = entity
        self._state = OverlayState.READY
        self._value.set(entity)
        self._logger.debug("overlay_ready")

    def _fail(self, error: ConduitClientError) -> None:
        self._state = OverlayState.FAILED
        self._failure = error
        self._logger.warning("overlay_fetch_failed", error=str(error))
        self._failures.emit(error)

    def close(self) -> None:
        """Detach from the focus: cancel the fetch, stop delivering."""
        if self._state is OverlayState.CLOSED:
            return
        self._state = OverlayState.CLOSED
        if self._task is not None and not self._task.done():
            self._task.cancel()

    # =========================================================================
    # Merged feed
    # =========================================================================

    def subscribe(
        self,
        on_value: Callable[[E], None],
        on_failure: Optional[FailureCallback] = None,
    ) -> Subscription:
        """Receive the latest value now (if any) and every change after.

        ``on_failure`` is called once if the fetch fails, including for
        subscribers that arrive after the failure.
        """
        def forward(value: Optional[E]) -> None:
            if value is not None:
                on_value(value)

        subs = [self._value.subscribe(forward)]
        if on_failure is not None:
            if self._state is OverlayState.FAILED:
                on_failure(self._failure)
            else:
                subs.append(self._failures.subscribe(on_failure))

        def unsubscribe_all() -> None:
            for sub in subs:
                sub.unsubscribe()

        return Subscription(unsubscribe_all)

    def apply_patch(self, patch: OverlayPatch) -> bool:
        """Fold a patch onto the latest value.

        Returns False (and changes nothing) when the patch targets another
        entity or the overlay has no live value to fold onto.
        """
        if patch.key != self.key:
            self._logger.debug(
                "overlay_patch_discarded",
                reason="key_mismatch",
                patch_key=patch.key,
            )
            return False
        if self._state is not OverlayState.READY:
            self._logger.debug(
                "overlay_patch_discarded",
                reason=self._state.value,
                patch=type(patch).__name__,
            )
            return False
        self.patches.emit(patch)
        self._value.set(self._fold(self._value.value, patch))
        return True


class OverlayHost(Generic[E]):
    """Holds the overlay for the current focus key.

    ``value`` follows whichever overlay is focused, so consumers subscribe
    once and keep receiving across focus changes. ``failures`` forwards
    each focused overlay's fetch failure.
    """

    def __init__(
        self,
        fetch: Fetch,
        fold: Fold,
        *,
        name: str = "overlay",
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._fetch = fetch
        self._fold = fold
        self.name = name
        self._logger = get_component_logger("OverlayHost", logger).bind(overlay=name)
        self._overlay_logger = logger
        self._current: Optional[Overlay[E]] = None
        self._link: Optional[Subscription] = None

        self.value: StateCell[Optional[E]] = StateCell(None, name=f"{name}.focused", logger=self._logger)
        self.failures: EventStream[ConduitClientError] = EventStream(
            name=f"{name}.focused_failures", logger=self._logger
        )

    @property
    def current(self) -> Optional[Overlay[E]]:
        return self._current

    @property
    def focus_key(self) -> Optional[str]:
        return self._current.key if self._current else None

    def focus(self, key: str) -> Overlay[E]:
        """Focus ``key``; a different key replaces the overlay and refetches."""
        current = self._current
        if current is not None and current.key == key and current.state is not OverlayState.CLOSED:
            return current

        self._release()
        overlay: Overlay[E] = Overlay(
            key, self._fetch, self._fold, name=self.name, logger=self._overlay_logger
        )
        self._current = overlay
        self.value.set(None)
        self._link = overlay.subscribe(self.value.set, self.failures.emit)
        overlay.load()
        self._logger.debug("overlay_focused", key=key)
        return overlay

    def apply_patch(self, patch: OverlayPatch) -> bool:
        if self._current is None:
            self._logger.debug("overlay_patch_discarded", reason="no_focus", patch_key=patch.key)
            return False
        return self._current.apply_patch(patch)

    async def wait_ready(self) -> Optional[E]:
        """Await the focused overlay's fetch and return the merged value."""
        if self._current is None or self._current.task is None:
            return None
        current = self._current
        await wait_settled(current.task)
        return current.value

    def close(self) -> None:
        self._release()
        self._current = None
        self.value.set(None)

    def _release(self) -> None:
        if self._link is not None:
            self._link.unsubscribe()
            self._link = None
        if self._current is not None:
            self._current.close()


__all__ = ["Overlay", "OverlayHost", "OverlayState", "PatchTarget"]
