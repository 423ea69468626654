"""Detached background work that never blocks or fails a request."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)

FailureSink = Callable[[str, BaseException], None]


def log_failure(name: str, exc: BaseException) -> None:
    """Default failure sink: log once with traceback and drop."""
    _logger.error("Background task %s failed", name, exc_info=exc)


@dataclass
class DetachedTaskRunner:
    """Run fire-and-forget coroutines on the current event loop.

    Failures are reported to ``failure_sink`` and never reach the caller.
    """

    failure_sink: FailureSink = log_failure
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, init=False)

    def spawn(self, name: str, work: Coroutine[object, object, None]) -> None:
        """Schedule ``work`` without waiting for it."""
        task = asyncio.get_running_loop().create_task(work, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._finish)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for all pending work, e.g. at shutdown."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _finish(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            _logger.warning("Background task %s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            self.failure_sink(task.get_name(), exc)
