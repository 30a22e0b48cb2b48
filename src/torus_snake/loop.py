"""Asyncio scheduler driving fixed-rate updates and render callbacks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Hashable

from torus_snake.game import GameState, RenderSnapshot

logger = logging.getLogger(__name__)

RenderCallback = Callable[[RenderSnapshot], None]


class GameLoop:
    """Dispatch key presses, ticks and frames to a :class:`GameState`.

    Ticks fire at a fixed cadence. When the loop falls behind, every missed
    tick is still executed in order. Frames fire at their own cadence and
    once more with the final state when the loop exits.
    """

    def __init__(
        self,
        state: GameState,
        render: RenderCallback | None = None,
        *,
        ticks_per_second: float | None = None,
        frames_per_second: float | None = None,
    ) -> None:
        ups = (
            state.config.ticks_per_second
            if ticks_per_second is None else ticks_per_second
        )
        fps = (
            state.config.frames_per_second
            if frames_per_second is None else frames_per_second
        )
        if ups <= 0 or fps <= 0:
            raise ValueError("Tick and frame rates must be positive.")
        self.state = state
        self.render = render
        self.tick_interval = 1.0 / ups
        self.frame_interval = 1.0 / fps
        self.ticks_run = 0
        self.frames_rendered = 0
        self._keys: asyncio.Queue[Hashable] = asyncio.Queue()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def push_key(self, key: Hashable) -> None:
        """Queue a key press for delivery before the next due tick."""
        self._keys.put_nowait(key)

    def stop(self) -> None:
        """Ask :meth:`run` to return after the current iteration."""
        self._running = False

    async def run(self, max_ticks: int | None = None) -> RenderSnapshot:
        """Run until the game ends, *max_ticks* ticks ran, or :meth:`stop`."""
        loop = asyncio.get_running_loop()
        start = loop.time()
        next_tick = start + self.tick_interval
        next_frame = start
        self._running = True
        logger.info(
            "Game loop started (%.1f ticks/s, %.1f frames/s).",
            1.0 / self.tick_interval, 1.0 / self.frame_interval,
        )
        try:
            while self._running and not self._finished(max_ticks):
                self._drain_keys()

                now = loop.time()
                while now >= next_tick and not self._finished(max_ticks):
                    self.state.on_tick()
                    self.ticks_run += 1
                    next_tick += self.tick_interval

                if now >= next_frame:
                    self._emit_frame()
                    next_frame = now + self.frame_interval

                if self._finished(max_ticks):
                    break
                delay = min(next_tick, next_frame) - loop.time()
                await asyncio.sleep(max(delay, 0.0))
        finally:
            self._running = False

        self._emit_frame()
        logger.info(
            "Game loop stopped after %d tick(s), %d frame(s).",
            self.ticks_run, self.frames_rendered,
        )
        return self.state.render_snapshot()

    def _finished(self, max_ticks: int | None) -> bool:
        if self.state.is_ended:
            return True
        return max_ticks is not None and self.ticks_run >= max_ticks

    def _drain_keys(self) -> None:
        while True:
            try:
                key = self._keys.get_nowait()
            except asyncio.QueueEmpty:
                return
            self.state.on_input(key)

    def _emit_frame(self) -> None:
        if self.render is None:
            return
        self.render(self.state.render_snapshot())
        self.frames_rendered += 1
