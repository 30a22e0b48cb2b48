"""Game configuration with JSON persistence."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from numbers import Integral
from pathlib import Path

from torus_snake.fruit import PlacementPolicy
from torus_snake.snake import Direction

logger = logging.getLogger(__name__)


def _check_integral(field_name: str, x: object, y: object) -> None:
    for value in (x, y):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise ValueError(f"{field_name} coordinates must be integers, got {value!r}.")


class InputMode(enum.Enum):
    """How key presses between two ticks are applied."""

    # Every accepted press rewrites the heading; the last one wins.
    IMMEDIATE = "immediate"
    # One accepted change is held and applied at the next tick.
    BUFFERED = "buffered"


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants for a single game.

    ``cell_size`` and ``frames_per_second`` are only consumed by
    presentation code; the simulation itself depends on ``grid_size``.
    """

    grid_size: int = 10
    cell_size: int = 100
    ticks_per_second: float = 8.0
    frames_per_second: float = 30.0
    initial_body: tuple[tuple[int, int], ...] = ((0, 0), (0, 0))
    initial_direction: Direction = Direction.RIGHT
    # Empty puts one fruit at the grid centre; ``None`` places
    # ``fruit_count`` fruits at random instead.
    initial_fruits: tuple[tuple[int, int], ...] | None = ()
    fruit_count: int = 1
    fruit_placement: PlacementPolicy = PlacementPolicy.CLASSIC
    input_mode: InputMode = InputMode.IMMEDIATE
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError("grid_size must be at least 2.")
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if self.ticks_per_second <= 0 or self.frames_per_second <= 0:
            raise ValueError("ticks_per_second and frames_per_second must be positive.")
        if len(self.initial_body) < 2:
            raise ValueError("initial_body must have at least 2 segments.")
        for x, y in self.initial_body:
            _check_integral("initial_body", x, y)
            if not self._fits(x, y):
                raise ValueError(f"initial_body cell ({x}, {y}) lies outside the grid.")
        if self.initial_fruits is None:
            if self.fruit_count < 1:
                raise ValueError("fruit_count must be at least 1.")
        else:
            for x, y in self.initial_fruits:
                _check_integral("initial_fruits", x, y)
                if not self._fits(x, y):
                    raise ValueError(f"initial fruit ({x}, {y}) lies outside the grid.")

    def _fits(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    @property
    def effective_fruits(self) -> tuple[tuple[int, int], ...] | None:
        """Fixed fruit cells, or ``None`` when fruits are placed at random."""
        if self.initial_fruits is None:
            return None
        if self.initial_fruits:
            return self.initial_fruits
        centre = self.grid_size // 2
        return ((centre, centre),)

    @property
    def window_size(self) -> int:
        """Side length of the square window in pixels."""
        return self.grid_size * self.cell_size

    @property
    def tick_interval(self) -> float:
        """Seconds between two simulation ticks."""
        return 1.0 / self.ticks_per_second

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "grid_size": self.grid_size,
            "cell_size": self.cell_size,
            "ticks_per_second": self.ticks_per_second,
            "frames_per_second": self.frames_per_second,
            "initial_body": [list(p) for p in self.initial_body],
            "initial_direction": self.initial_direction.name.lower(),
            "initial_fruits": (
                None if self.initial_fruits is None
                else [list(p) for p in self.initial_fruits]
            ),
            "fruit_count": self.fruit_count,
            "fruit_placement": self.fruit_placement.value,
            "input_mode": self.input_mode.value,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        """Build a config from :meth:`to_dict` output; missing keys use defaults."""
        data = dict(raw)
        if "initial_body" in data:
            data["initial_body"] = tuple(tuple(p) for p in data["initial_body"])
        if data.get("initial_fruits") is not None:
            data["initial_fruits"] = tuple(tuple(p) for p in data["initial_fruits"])
        if "initial_direction" in data:
            name = str(data["initial_direction"]).upper()
            if name not in Direction.__members__:
                raise ValueError(f"Unknown direction: {data['initial_direction']!r}")
            data["initial_direction"] = Direction[name]
        if "fruit_placement" in data:
            data["fruit_placement"] = PlacementPolicy(data["fruit_placement"])
        if "input_mode" in data:
            data["input_mode"] = InputMode(data["input_mode"])
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
