"""Step-by-step playback of a visitation order.

The animator is a small state machine (``order``, ``cursor``, ``status``)
driven by one asyncio task per run. Each run captures a token when it
starts; ``cancel()`` and every new ``play()`` bump the token, and a tick
whose token is stale returns without touching the sink. A superseded run
therefore cannot write a tag after its successor has cleared the canvas,
even if its sleep was already over when it was cancelled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from graphwalk.config import settings
from graphwalk.models.traversal import PlaybackStatus, VisualState
from graphwalk.services.renderer import VisualStateSink

logger = logging.getLogger(__name__)


class PlaybackAnimator:
    def __init__(self, step_delay: float | None = None) -> None:
        self.step_delay = settings.step_delay_seconds if step_delay is None else step_delay
        self._order: list[str] = []
        self._cursor = 0
        self._status = PlaybackStatus.IDLE
        self._run_id = 0
        self._task: asyncio.Task | None = None

    @property
    def order(self) -> list[str]:
        return list(self._order)

    @property
    def cursor(self) -> int:
        """Number of steps applied so far in the current run."""
        return self._cursor

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status is PlaybackStatus.RUNNING

    def play(self, order: Sequence[str], sink: VisualStateSink) -> asyncio.Task | None:
        """Start a new run, superseding any run in flight.

        Tags are cleared before anything else, then step 0 is applied right
        away. Remaining steps fire every ``step_delay`` seconds from a
        background task, which is returned (``None`` when nothing is left to
        schedule).

        An order with more than one node needs a running event loop; without
        one ``RuntimeError`` is raised before any state or tag changes.
        """
        order = list(order)
        loop = asyncio.get_running_loop() if len(order) > 1 else None

        self.cancel()
        run_id = self._run_id
        self._order = order
        self._cursor = 0

        sink.clear_all_visual_state()
        if not self._order:
            self._status = PlaybackStatus.FINISHED
            return None

        self._status = PlaybackStatus.RUNNING
        logger.info("Playback %d started: %d steps", run_id, len(self._order))
        if not self._tick(run_id, sink):
            return None

        self._task = loop.create_task(self._run(run_id, sink))
        return self._task

    def cancel(self) -> None:
        self._run_id += 1
        if self._status is PlaybackStatus.RUNNING:
            self._status = PlaybackStatus.CANCELLED
            logger.info("Playback cancelled at step %d/%d", self._cursor, len(self._order))
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Block until the latest run's task is done (finished or cancelled)."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    async def _run(self, run_id: int, sink: VisualStateSink) -> None:
        while True:
            await asyncio.sleep(self.step_delay)
            if not self._tick(run_id, sink):
                return

    def _tick(self, run_id: int, sink: VisualStateSink) -> bool:
        """Apply one step; return True while more steps remain."""
        if run_id != self._run_id or self._status is not PlaybackStatus.RUNNING:
            return False

        i = self._cursor
        if i > 0:
            sink.set_visual_state(self._order[i - 1], VisualState.VISITED)
        sink.set_visual_state(self._order[i], VisualState.FRONTIER)
        self._cursor = i + 1
        logger.debug("Playback %d step %d: %s", run_id, i, self._order[i])

        if self._cursor >= len(self._order):
            # The last node keeps its frontier tag.
            self._status = PlaybackStatus.FINISHED
            logger.info("Playback %d finished", run_id)
            return False
        return True
