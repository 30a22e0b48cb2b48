"""Fruit placement and consumption logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from torus_snake.grid import GridPosition

if TYPE_CHECKING:
    import numpy as np

    from torus_snake.grid import Grid
    from torus_snake.snake import Snake

logger = logging.getLogger(__name__)


class PlacementPolicy(enum.Enum):
    """Which cells a relocated fruit may land on."""

    # Differ from the previous fruit cell on both axes.
    CLASSIC = "classic"
    # Any cell the snake does not occupy.
    AVOID_SNAKE = "avoid_snake"


def snake_can_eat(fruit: Fruit, snake: Snake) -> bool:
    """Check whether the snake's head sits on the fruit."""
    return fruit.position == snake.head


class Fruit:
    """A single collectible occupying one grid cell."""

    def __init__(self, position: tuple[int, int]) -> None:
        self.position = GridPosition(*position)

    @classmethod
    def random(cls, grid: Grid, rng: np.random.Generator) -> Fruit:
        """Create a fruit on a uniformly random cell."""
        return cls(grid.random_position(rng))

    def snake_can_eat(self, snake: Snake) -> bool:
        return snake_can_eat(self, snake)

    def set_rand_position(
        self,
        grid: Grid,
        rng: np.random.Generator,
        occupied: Iterable[GridPosition] = (),
        policy: PlacementPolicy = PlacementPolicy.CLASSIC,
    ) -> GridPosition:
        """Move the fruit to a random cell accepted by *policy*.

        Cells are drawn uniformly and rejected until one passes, so the
        number of draws is unbounded but finite with probability 1. When no
        cell on the grid can pass, the fruit is left where it is.
        """
        previous = self.position
        blocked = (
            frozenset(occupied)
            if policy is PlacementPolicy.AVOID_SNAKE else frozenset()
        )

        def accepts(cell: GridPosition) -> bool:
            if policy is PlacementPolicy.AVOID_SNAKE:
                return cell not in blocked
            return cell.x != previous.x and cell.y != previous.y

        if not any(accepts(cell) for cell in grid.positions()):
            logger.warning("No free cell available for fruit placement.")
            return self.position

        draws = 0
        while True:
            candidate = grid.random_position(rng)
            draws += 1
            if accepts(candidate):
                break

        self.position = candidate
        logger.debug(
            "Fruit moved from %s to %s after %d draw(s).",
            tuple(previous), tuple(candidate), draws,
        )
        return candidate

    def to_dict(self) -> dict:
        """Serialize fruit state to a dictionary."""
        return {"position": list(self.position)}
