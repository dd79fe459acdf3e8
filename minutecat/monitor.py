"""Monitor — single owner of a LogSet.

The Monitor is the only object that polls or mutates its LogSet.  Front
ends never hold the LogSet themselves; they:

1. **Receive** events through the handlers the Monitor creates for each
   Logfile (``handler_factory``), e.g. a ``QueueHandler`` or ``LogView``.
2. **Mutate** by passing Commands to ``execute()`` / ``undo()``.
3. **Read** detached copies from ``snapshot()``.

One ``asyncio.Lock`` serialises polling and mutation, so nobody observes a
Logfile between loading its text and dispatching its trigger results.  The
per-log handler lists are kept aligned with the LogSet after every command.

Lifecycle::

    monitor = Monitor(logset, store=store, handler_factory=lambda lf: [LogView()])
    await monitor.start()      # force-loads every source, then polls
    ...
    await monitor.stop()       # cancels in-flight fetches, closes clients, saves
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

from minutecat.commands import Command
from minutecat.config import Settings
from minutecat.exceptions import LogfileIndexError
from minutecat.logfile import EventHandler, Logfile
from minutecat.logging import get_logger
from minutecat.logset import LogSet
from minutecat.store import LogSetStore

log = get_logger(__name__)

HandlerFactory = Callable[[Logfile], list[EventHandler]]


def _no_handlers(_logfile: Logfile) -> list[EventHandler]:
    return []


class Monitor:
    def __init__(
        self,
        logset: LogSet,
        store: LogSetStore | None = None,
        handler_factory: HandlerFactory | None = None,
        poll_interval_seconds: float = 1.0,
    ) -> None:
        if poll_interval_seconds <= 0:
            raise ValueError(f"poll_interval_seconds must be positive, got {poll_interval_seconds}")
        self._logset = logset
        self._store = store
        self._factory = handler_factory or _no_handlers
        self._handlers: list[list[EventHandler]] = [self._factory(lf) for lf in logset.logs]
        # Logfiles the handler lists were built for, in the same order.
        self._aligned: list[Logfile] = list(logset.logs)
        self._poll_interval = poll_interval_seconds

        self._lock = asyncio.Lock()
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: LogSetStore,
        handler_factory: HandlerFactory | None = None,
    ) -> "Monitor":
        """Load the persisted LogSet from *store* and wrap it."""
        return cls(
            store.load(),
            store=store,
            handler_factory=handler_factory,
            poll_interval_seconds=settings.monitor.poll_interval_seconds,
        )

    # ---------------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------------

    async def start(self, force_first: bool = True) -> None:
        """Start the polling task.  Optionally load every source once first."""
        if self.is_running:
            return
        self._stop_event.clear()
        if force_first:
            await self.poll_once(force=True)
        self._task = asyncio.create_task(self._run(), name="minutecat_monitor")
        log.info("monitor_started", logs=len(self._logset), interval=self._poll_interval)

    async def stop(self) -> None:
        """Stop polling, cancel any in-flight fetch, close clients and save."""
        self._stop_event.set()
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None

        async with self._lock:
            await self._logset.aclose()
            await self._persist()
        log.info("monitor_stopped")

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                log.error("monitor_poll_error", error=str(exc))
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._poll_interval)
                return  # stop_event was set
            except asyncio.TimeoutError:
                pass

    # ---------------------------------------------------------------------------
    # Polling
    # ---------------------------------------------------------------------------

    async def poll_once(self, force: bool = False) -> list[bool]:
        """Run one batch update under the lock."""
        async with self._lock:
            if force:
                return await self._logset.force_update(self._handlers)
            return await self._logset.update(self._handlers)

    # ---------------------------------------------------------------------------
    # Mutation
    # ---------------------------------------------------------------------------

    async def execute(self, command: Command[Any], log_index: int | None = None) -> None:
        """Execute *command* against the LogSet, or against one Logfile.

        Commands acting on a Logfile (trigger commands) need *log_index*.
        The result is persisted when a store is configured.
        """
        async with self._lock:
            command.execute(self._target(log_index))
            self._realign()
            await self._persist()

    async def undo(self, command: Command[Any], log_index: int | None = None) -> None:
        async with self._lock:
            command.undo(self._target(log_index))
            self._realign()
            await self._persist()

    def _target(self, log_index: int | None) -> LogSet | Logfile:
        if log_index is None:
            return self._logset
        if not 0 <= log_index < len(self._logset):
            raise LogfileIndexError(log_index, len(self._logset))
        return self._logset.logs[log_index]

    def _realign(self) -> None:
        """Rebuild handler lists so they follow the LogSet order again.

        Logfiles still present keep their handlers; new ones get fresh
        handlers from the factory.
        """
        previous = {id(lf): handlers for lf, handlers in zip(self._aligned, self._handlers)}
        handlers: list[list[EventHandler]] = []
        for lf in self._logset.logs:
            kept = previous.get(id(lf))
            handlers.append(kept if kept is not None else self._factory(lf))
        self._handlers = handlers
        self._aligned = list(self._logset.logs)

    async def _persist(self) -> None:
        if self._store is not None:
            await asyncio.to_thread(self._store.save, self._logset)

    # ---------------------------------------------------------------------------
    # Read access
    # ---------------------------------------------------------------------------

    async def snapshot(self) -> LogSet:
        """Return a detached copy of the LogSet."""
        async with self._lock:
            return LogSet.model_validate(self._logset.model_dump())

    def handlers(self, index: int) -> Sequence[EventHandler]:
        """Return the handlers attached to the Logfile at *index*."""
        return tuple(self._handlers[index])

    def __len__(self) -> int:
        return len(self._logset)
