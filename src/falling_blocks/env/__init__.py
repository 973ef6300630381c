"""Gymnasium environments for Falling Blocks."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 10x20 environment
register(
    id="FallingBlocks-10x20-v0",
    entry_point="falling_blocks.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["FallingBlocks-10x20-v0"]
