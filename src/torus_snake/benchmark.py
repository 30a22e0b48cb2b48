"""Headless simulation throughput measurement."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace

import numpy as np

from torus_snake.config import GameConfig
from torus_snake.game import GameState
from torus_snake.snake import KEY_BINDINGS

logger = logging.getLogger(__name__)

_KEYS = sorted(KEY_BINDINGS)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    games_ended: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games "
            f"({self.games_ended} ended by collision), "
            f"{self.total_ticks} ticks in {self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    max_ticks: int = 500,
    config: GameConfig | None = None,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw tick throughput with a random key pressed every tick.

    Each game runs until the snake collides with itself or *max_ticks*
    ticks have elapsed.
    """
    if num_games < 1 or max_ticks < 1:
        raise ValueError("num_games and max_ticks must be at least 1.")
    base = config or GameConfig()
    rng = np.random.default_rng(seed)

    total_ticks = 0
    games_ended = 0
    start = time.perf_counter()

    for _ in range(num_games):
        game_cfg = replace(base, seed=int(rng.integers(2**31)))
        state = GameState(game_cfg)
        for _ in range(max_ticks):
            state.on_input(_KEYS[int(rng.integers(len(_KEYS)))])
            state.on_tick()
            total_ticks += 1
            if state.is_ended:
                games_ended += 1
                break

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        games_ended=games_ended,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
