"""Play the gym environment with uniformly random actions.

Run with::

    PYTHONPATH=src python examples/random_agent.py --episodes 3

Each finished episode is summarised through :mod:`logging`.
"""

from __future__ import annotations

import argparse
import logging

from blockfall.gym_env import BlockfallGymEnv


LOGGER = logging.getLogger(__name__)


def run_episode(env: BlockfallGymEnv, *, seed: int | None = None) -> dict[str, float | int]:
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    steps = 0
    terminated = truncated = False
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += reward
        steps += 1
    return {
        "steps": steps,
        "reward": total_reward,
        "score": info["score"],
        "lines": info["lines"],
        "level": info["level"],
    }


def log_summary(result: dict[str, float | int], *, index: int) -> None:
    LOGGER.info(
        "Episode %d: steps=%d, reward=%.1f, score=%d, lines=%d, level=%d",
        index,
        result["steps"],
        result["reward"],
        result["score"],
        result["lines"],
        result["level"],
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--episodes", type=int, default=1, help="Number of episodes to play.")
    parser.add_argument("--max-steps", type=int, default=20000, help="Truncate episodes after N steps.")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the first episode.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    env = BlockfallGymEnv(max_steps=args.max_steps)
    env.action_space.seed(args.seed)
    for index in range(1, args.episodes + 1):
        seed = None if args.seed is None else args.seed + index - 1
        log_summary(run_episode(env, seed=seed), index=index)
    env.close()


if __name__ == "__main__":
    main()
