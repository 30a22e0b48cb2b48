"""Torus Snake: core game simulation on a wrap-around grid."""

from torus_snake.config import GameConfig, InputMode
from torus_snake.fruit import Fruit, PlacementPolicy, snake_can_eat
from torus_snake.game import GameState, GameStatus, RenderSnapshot
from torus_snake.grid import Grid, GridPosition
from torus_snake.loop import GameLoop
from torus_snake.snake import Direction, Snake, apply_key, snake_died

__all__ = [
    "Direction",
    "Fruit",
    "GameConfig",
    "GameLoop",
    "GameState",
    "GameStatus",
    "Grid",
    "GridPosition",
    "InputMode",
    "PlacementPolicy",
    "RenderSnapshot",
    "Snake",
    "apply_key",
    "snake_can_eat",
    "snake_died",
]
