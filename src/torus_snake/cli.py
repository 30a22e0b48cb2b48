"""Command-line runner for the torus snake game."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

import numpy as np

from torus_snake.config import GameConfig, InputMode
from torus_snake.fruit import PlacementPolicy
from torus_snake.game import GameState, RenderSnapshot
from torus_snake.grid import CellType, Grid
from torus_snake.loop import GameLoop
from torus_snake.snake import KEY_BINDINGS

logger = logging.getLogger(__name__)

_CELL_GLYPHS: dict[int, str] = {
    CellType.EMPTY: ".",
    CellType.SNAKE: "o",
    CellType.HEAD: "@",
    CellType.FRUIT: "*",
}

# Placeholder in a --keys script for "no key this tick".
_NO_KEY = "."


def format_board(snapshot: RenderSnapshot, grid: Grid) -> str:
    """Draw a snapshot as one text line per grid row."""
    cells = grid.to_array(snapshot.body, snapshot.fruits)
    return "\n".join(
        "".join(_CELL_GLYPHS[int(code)] for code in row) for row in cells
    )


def _summary(state: GameState) -> str:
    return (
        f"tick={state.tick} length={len(state.snake)} "
        f"status={state.status.value}"
    )


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file; other flags override it.",
    )
    common.add_argument("--grid-size", type=int, default=None)
    common.add_argument("--seed", type=int, default=None)
    common.add_argument(
        "--placement", type=str, default=None,
        choices=[p.value for p in PlacementPolicy],
    )
    common.add_argument(
        "--input-mode", type=str, default=None,
        choices=[m.value for m in InputMode],
    )
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Log at DEBUG level.",
    )

    parser = argparse.ArgumentParser(
        prog="torus-snake",
        description="Snake on a wrap-around grid: simulate, play, benchmark.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", parents=[common],
        help="Run a scripted game, one key per tick.",
    )
    sim_p.add_argument(
        "--keys", type=str, default="",
        help="Keys to press, one per tick; '.' presses nothing.",
    )
    sim_p.add_argument(
        "--ticks", type=int, default=None,
        help="Total ticks to run (default: length of --keys).",
    )

    # --- run ---
    run_p = sub.add_parser(
        "run", parents=[common],
        help="Run in real time with a random pilot.",
    )
    run_p.add_argument("--max-ticks", type=int, default=64)
    run_p.add_argument("--ticks-per-second", type=float, default=None)
    run_p.add_argument("--frames-per-second", type=float, default=None)
    run_p.add_argument(
        "--show", action="store_true", help="Print every rendered frame.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", parents=[common], help="Measure simulation throughput.",
    )
    bench_p.add_argument("--num-games", type=int, default=100)
    bench_p.add_argument("--max-ticks", type=int, default=500)

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    if args.grid_size is not None:
        overrides["grid_size"] = args.grid_size
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.placement is not None:
        overrides["fruit_placement"] = PlacementPolicy(args.placement)
    if args.input_mode is not None:
        overrides["input_mode"] = InputMode(args.input_mode)
    if getattr(args, "ticks_per_second", None) is not None:
        overrides["ticks_per_second"] = args.ticks_per_second
    if getattr(args, "frames_per_second", None) is not None:
        overrides["frames_per_second"] = args.frames_per_second

    return replace(config, **overrides) if overrides else config


def _run_simulate(args: argparse.Namespace, config: GameConfig) -> int:
    state = GameState(config)
    ticks = args.ticks if args.ticks is not None else len(args.keys)

    for i in range(ticks):
        key = args.keys[i] if i < len(args.keys) else _NO_KEY
        if key != _NO_KEY:
            state.on_input(key)
        state.on_tick()
        if state.is_ended:
            break

    print(format_board(state.render_snapshot(), state.grid))  # noqa: T201
    print(_summary(state))  # noqa: T201
    return 0


async def _random_pilot(loop: GameLoop, rng: np.random.Generator) -> None:
    keys = sorted(KEY_BINDINGS)
    while True:
        await asyncio.sleep(loop.tick_interval)
        loop.push_key(keys[int(rng.integers(len(keys)))])


async def _play(state: GameState, loop: GameLoop, max_ticks: int) -> None:
    pilot_rng = np.random.default_rng(state.config.seed)
    pilot = asyncio.create_task(_random_pilot(loop, pilot_rng))
    try:
        await loop.run(max_ticks=max_ticks)
    finally:
        pilot.cancel()
        await asyncio.gather(pilot, return_exceptions=True)


def _run_realtime(args: argparse.Namespace, config: GameConfig) -> int:
    state = GameState(config)

    def show(snapshot: RenderSnapshot) -> None:
        print(format_board(snapshot, state.grid))  # noqa: T201
        print()  # noqa: T201

    loop = GameLoop(state, show if args.show else None)
    asyncio.run(_play(state, loop, args.max_ticks))
    print(_summary(state))  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace, config: GameConfig) -> int:
    from torus_snake.benchmark import benchmark_throughput

    result = benchmark_throughput(
        num_games=args.num_games,
        max_ticks=args.max_ticks,
        config=config,
        seed=config.seed if config.seed is not None else 42,
    )
    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``torus-snake`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = _load_config(args)
    except (OSError, TypeError, ValueError) as exc:
        print(f"torus-snake: invalid configuration: {exc}", file=sys.stderr)  # noqa: T201
        return 2

    handlers = {
        "simulate": _run_simulate,
        "run": _run_realtime,
        "benchmark": _run_benchmark,
    }
    return handlers[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
