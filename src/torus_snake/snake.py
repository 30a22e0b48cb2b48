"""Snake representation, heading rules and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Hashable, Iterable
from typing import TYPE_CHECKING

from torus_snake.grid import GridPosition

if TYPE_CHECKING:
    from torus_snake.grid import Grid


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) values. ``y`` grows downwards."""

    RIGHT = (1, 0)
    LEFT = (-1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def opposite(self) -> Direction:
        """The heading that would reverse straight into the neck."""
        return _OPPOSITES[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# WASD plus arrow-key names as delivered by most input backends.
KEY_BINDINGS: dict[str, Direction] = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
    "a": Direction.LEFT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "right": Direction.RIGHT,
    "left": Direction.LEFT,
}


def apply_key(current: Direction, key: Hashable) -> Direction:
    """Return the heading that results from pressing *key*.

    Unbound keys and 180° reversals leave *current* unchanged.
    """
    if not isinstance(key, str):
        return current
    requested = KEY_BINDINGS.get(key.lower())
    if requested is None or requested is current.opposite:
        return current
    return requested


def snake_died(body: Iterable[GridPosition]) -> bool:
    """Check whether the head overlaps any other segment of *body*."""
    segments = iter(body)
    head = next(segments, None)
    if head is None:
        raise RuntimeError("Snake has no head.")
    for segment in segments:
        if segment == head:
            return True
    return False


class Snake:
    """A snake stored as a deque of :class:`GridPosition` segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        body: Iterable[tuple[int, int]] = ((0, 0), (0, 0)),
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.body: deque[GridPosition] = deque(
            GridPosition(x, y) for x, y in body
        )
        if len(self.body) < 2:
            raise ValueError("Snake body must have at least 2 segments.")
        self.direction = direction

    @property
    def head(self) -> GridPosition:
        """Return the head coordinate."""
        if not self.body:
            raise RuntimeError("Snake has no head.")
        return self.body[0]

    @property
    def tail(self) -> GridPosition:
        """Return the tail coordinate."""
        if not self.body:
            raise RuntimeError("Snake has no tail.")
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def apply_key(self, key: Hashable) -> Direction:
        """Update the heading from a key press and return it."""
        self.direction = apply_key(self.direction, key)
        return self.direction

    def next_head(self, grid: Grid) -> GridPosition:
        """Compute the wrapped next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return grid.wrap(x + dx, y + dy)

    def update(self, grid: Grid) -> GridPosition:
        """Move one cell along the heading, wrapping at the edges.

        Returns the vacated tail cell.
        """
        self.body.appendleft(self.next_head(grid))
        return self.body.pop()

    def increase_body_size(self) -> None:
        """Duplicate the tail so the next :meth:`update` leaves it behind."""
        self.body.append(self.tail)

    def snake_died(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        return snake_died(self.body)

    def occupies(self, position: tuple[int, int]) -> bool:
        """Check whether the snake occupies a given cell."""
        return position in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
        }
