"""Tick-based game state composing grid, snake, and fruit logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Hashable
from typing import NamedTuple

import numpy as np

from torus_snake.config import GameConfig, InputMode
from torus_snake.fruit import Fruit
from torus_snake.grid import Grid, GridPosition
from torus_snake.snake import Direction, Snake, apply_key

logger = logging.getLogger(__name__)


class GameStatus(enum.Enum):
    RUNNING = "running"
    ENDED = "ended"


class RenderSnapshot(NamedTuple):
    """Everything a presentation layer needs to draw one frame."""

    body: tuple[GridPosition, ...]
    fruits: tuple[GridPosition, ...]
    is_ended: bool


class GameState:
    """Single-snake game on a toroidal grid.

    The state owns the snake, its fruits and the random generator used to
    place them. A presentation layer drives it through :meth:`on_input`,
    :meth:`on_tick` and :meth:`render_snapshot`.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.grid = Grid(cfg.grid_size)
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.snake = Snake(cfg.initial_body, cfg.initial_direction)

        fixed_fruits = cfg.effective_fruits
        if fixed_fruits is not None:
            self.fruits = [Fruit(pos) for pos in fixed_fruits]
        else:
            self.fruits = [
                Fruit.random(self.grid, self.rng) for _ in range(cfg.fruit_count)
            ]

        self.status = GameStatus.RUNNING
        self.tick = 0
        self._pending_direction: Direction | None = None

    @property
    def is_ended(self) -> bool:
        return self.status is GameStatus.ENDED

    def on_input(self, key: Hashable) -> None:
        """Apply a key press to the snake's heading."""
        if self.is_ended:
            return

        if self.config.input_mode is InputMode.IMMEDIATE:
            self.snake.apply_key(key)
            return

        if self._pending_direction is not None:
            return
        requested = apply_key(self.snake.direction, key)
        if requested is not self.snake.direction:
            self._pending_direction = requested

    def on_tick(self) -> RenderSnapshot:
        """Advance the game by one tick and return the resulting snapshot."""
        if self.is_ended:
            return self.render_snapshot()

        if self._pending_direction is not None:
            self.snake.direction = self._pending_direction
            self._pending_direction = None

        self.snake.update(self.grid)

        for fruit in self.fruits:
            if fruit.snake_can_eat(self.snake):
                eaten_at = fruit.position
                fruit.set_rand_position(
                    self.grid,
                    self.rng,
                    occupied=self.snake.body,
                    policy=self.config.fruit_placement,
                )
                self.snake.increase_body_size()
                logger.debug(
                    "Fruit eaten at %s on tick %d; length now %d.",
                    tuple(eaten_at), self.tick + 1, len(self.snake),
                )

        self.tick += 1
        if self.snake.snake_died():
            self.status = GameStatus.ENDED
            logger.info(
                "Snake died at tick %d with length %d.",
                self.tick, len(self.snake),
            )

        return self.render_snapshot()

    def render_snapshot(self) -> RenderSnapshot:
        """Return an immutable view of the body, fruits and end flag."""
        return RenderSnapshot(
            body=tuple(self.snake.body),
            fruits=tuple(f.position for f in self.fruits),
            is_ended=self.is_ended,
        )

    def board(self) -> np.ndarray:
        """Rasterise the current state into a ``[y, x]`` cell array."""
        snapshot = self.render_snapshot()
        return self.grid.to_array(snapshot.body, snapshot.fruits)

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "status": self.status.value,
            "grid_size": self.grid.size,
            "snake": self.snake.to_dict(),
            "fruits": [f.to_dict() for f in self.fruits],
        }
