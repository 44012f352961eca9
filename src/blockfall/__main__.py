"""Simple ASCII demo for the engine.

Run with: `python -m blockfall`

This module starts a game, advances the clock by a few seconds and prints a
single frame composed of the board plus the active piece, useful as a minimal
smoke test to ensure renderers see more than a blank grid.
"""

from __future__ import annotations

import argparse
import logging

from .engine import GameEngine


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join("#" if cell else "." for cell in row))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print one ASCII frame of a game.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--seconds", type=float, default=3.0, help="Simulated time before the frame.")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    engine = GameEngine(seed=args.seed)
    engine.start()
    frame_ms = 1000.0 / 60
    for _ in range(int(args.seconds * 1000 / frame_ms)):
        engine.tick(frame_ms)
    _print_grid(engine.render_grid())
    preview = engine.next_piece
    print(f"Score: {engine.score}  Level: {engine.level}  Next: {preview.shape.value if preview else '-'}")


if __name__ == "__main__":
    main()
