"""Tests for GameConfig validation and persistence."""

import json
from dataclasses import replace

import numpy as np
import pytest

from torus_snake.config import GameConfig, InputMode
from torus_snake.fruit import PlacementPolicy
from torus_snake.snake import Direction


class TestGameConfigDefaults:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 10
        assert cfg.ticks_per_second == 8.0
        assert cfg.initial_body == ((0, 0), (0, 0))
        assert cfg.initial_direction == Direction.RIGHT
        assert cfg.effective_fruits == ((5, 5),)
        assert cfg.fruit_placement == PlacementPolicy.CLASSIC
        assert cfg.input_mode == InputMode.IMMEDIATE

    @pytest.mark.parametrize(
        ("grid_size", "expected"), [(2, (1, 1)), (4, (2, 2)), (5, (2, 2)), (11, (5, 5))],
    )
    def test_default_fruit_follows_grid_size(self, grid_size, expected):
        cfg = GameConfig(grid_size=grid_size)
        assert cfg.initial_fruits == ()
        assert cfg.effective_fruits == (expected,)

    def test_replace_grid_size_recentres_fruit(self):
        cfg = replace(GameConfig(), grid_size=4)
        assert cfg.effective_fruits == ((2, 2),)

    def test_derived_values(self):
        cfg = GameConfig()
        assert cfg.window_size == 1000
        assert cfg.tick_interval == pytest.approx(0.125)


class TestGameConfigValidation:
    def test_grid_too_small(self):
        with pytest.raises(ValueError, match="grid_size"):
            GameConfig(grid_size=1)

    def test_non_positive_rate(self):
        with pytest.raises(ValueError, match="positive"):
            GameConfig(ticks_per_second=0)

    def test_short_body(self):
        with pytest.raises(ValueError, match="at least 2"):
            GameConfig(initial_body=((0, 0),))

    def test_body_outside_grid(self):
        with pytest.raises(ValueError, match="outside the grid"):
            GameConfig(grid_size=5, initial_body=((5, 0), (4, 0)))

    def test_fruit_outside_grid(self):
        with pytest.raises(ValueError, match="outside the grid"):
            GameConfig(grid_size=4, initial_fruits=((5, 5),))

    def test_float_body_coordinates_rejected(self):
        with pytest.raises(ValueError, match="must be integers"):
            GameConfig(initial_body=((1.5, 0), (0, 0)))

    def test_bool_fruit_coordinates_rejected(self):
        with pytest.raises(ValueError, match="must be integers"):
            GameConfig(initial_fruits=((True, 0),))

    def test_numpy_integers_accepted(self):
        cfg = GameConfig(initial_fruits=((np.int64(2), np.int64(3)),))
        assert cfg.effective_fruits == ((2, 3),)

    def test_random_fruit_count(self):
        with pytest.raises(ValueError, match="fruit_count"):
            GameConfig(initial_fruits=None, fruit_count=0)

    def test_frozen(self):
        cfg = GameConfig()
        with pytest.raises(AttributeError):
            cfg.grid_size = 20


class TestGameConfigSerialization:
    def test_to_dict_is_json_ready(self):
        d = GameConfig().to_dict()
        json.dumps(d)
        assert d["initial_direction"] == "right"
        assert d["fruit_placement"] == "classic"

    def test_save_load_preserves_values(self, tmp_path):
        cfg = GameConfig(
            grid_size=12,
            initial_body=((3, 3), (2, 3)),
            initial_direction=Direction.DOWN,
            initial_fruits=None,
            fruit_count=2,
            fruit_placement=PlacementPolicy.AVOID_SNAKE,
            input_mode=InputMode.BUFFERED,
            seed=7,
        )
        path = tmp_path / "nested" / "game.json"
        cfg.save(path)
        assert GameConfig.load(path) == cfg

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"grid_size": 20, "input_mode": "buffered"}))
        cfg = GameConfig.load(path)
        assert cfg.grid_size == 20
        assert cfg.input_mode == InputMode.BUFFERED
        assert cfg.effective_fruits == ((10, 10),)

    def test_float_coordinates_in_file_rejected(self, tmp_path):
        path = tmp_path / "floats.json"
        path.write_text(json.dumps({"initial_body": [[1.5, 0], [0, 0]]}))
        with pytest.raises(ValueError, match="must be integers"):
            GameConfig.load(path)

    def test_unknown_direction(self):
        with pytest.raises(ValueError, match="Unknown direction"):
            GameConfig.from_dict({"initial_direction": "sideways"})

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            GameConfig.from_dict({"fruit_placement": "anywhere"})
