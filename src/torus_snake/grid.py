"""Toroidal grid coordinates for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from typing import NamedTuple

import numpy as np


class GridPosition(NamedTuple):
    """A single cell on the grid. ``x`` grows rightwards, ``y`` downwards."""

    x: int
    y: int


class CellType(enum.IntEnum):
    """Integer codes used when rasterising the board."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FRUIT = 3


class Grid:
    """Square toroidal grid of ``size`` × ``size`` cells.

    Coordinates leaving one edge re-enter from the opposite edge.
    """

    def __init__(self, size: int = 10) -> None:
        if size < 2:
            raise ValueError("Grid size must be at least 2.")
        self.size = size

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def wrap(self, x: int, y: int) -> GridPosition:
        """Wrap coordinates around the grid edges."""
        return GridPosition(x % self.size, y % self.size)

    def positions(self) -> Iterator[GridPosition]:
        """Yield every cell in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                yield GridPosition(x, y)

    def random_position(self, rng: np.random.Generator) -> GridPosition:
        """Draw a uniformly random cell."""
        x, y = rng.integers(0, self.size, size=2).tolist()
        return GridPosition(x, y)

    def to_array(
        self,
        body: Iterable[GridPosition],
        fruits: Iterable[GridPosition] = (),
    ) -> np.ndarray:
        """Rasterise a snake body and fruits into a ``[y, x]`` int8 array.

        Fruits are painted first so a snake segment sharing a fruit's cell
        stays visible.
        """
        cells = np.zeros((self.size, self.size), dtype=np.int8)
        for x, y in fruits:
            cells[y, x] = CellType.FRUIT
        segments = list(body)
        for x, y in segments[1:]:
            cells[y, x] = CellType.SNAKE
        if segments:
            hx, hy = segments[0]
            cells[hy, hx] = CellType.HEAD
        return cells
