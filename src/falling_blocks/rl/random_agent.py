from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym

import falling_blocks.env  # noqa: F401
from falling_blocks.game import format_board


def run_random(steps: int = 500, seed: Optional[int] = None, show_board: bool = False) -> float:
    env = gym.make("FallingBlocks-10x20-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    if show_board:
        print(format_board(env.unwrapped.game.board))
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}  "
          f"episodes finished: {episodes}  rows cleared: {info['rows_cleared_total']}")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--show-board", action="store_true")
    return p


def main() -> None:
    args = build_parser().parse_args()
    run_random(steps=args.steps, seed=args.seed, show_board=args.show_board)


if __name__ == "__main__":  # pragma: no cover
    main()
