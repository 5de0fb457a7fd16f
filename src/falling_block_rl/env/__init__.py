"""Gymnasium environments for Falling Block RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 10x20 environment
register(
    id="FallingBlock-10x20-v0",
    entry_point="falling_block_rl.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["FallingBlock-10x20-v0"]
